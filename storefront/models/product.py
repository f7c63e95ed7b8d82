"""Product models for the storefront catalog"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, normalize_optional_price, normalize_price


class Badge(str, Enum):
    BEST_SELLER = "Best Seller"
    NEW = "New"
    LIMITED = "Limited"
    VINTAGE = "Vintage"


class SortOption(str, Enum):
    NAME_ASC = "Name: A to Z"
    PRICE_ASC = "Price: Low to High"
    PRICE_DESC = "Price: High to Low"
    RATING_DESC = "Rating: High to Low"


ALL_CATEGORIES = "All Categories"


class Product(CamelModel):
    """Product in the catalog"""
    id: int
    name: str
    description: str
    price: str
    original_price: Optional[str] = None
    category: str
    image_url: str
    rating: str = "0"
    review_count: int = 0
    badge: Optional[Badge] = None
    is_favorite: bool = False
    created_at: datetime

    @property
    def price_amount(self) -> Decimal:
        return Decimal(self.price)

    @property
    def rating_amount(self) -> Decimal:
        return Decimal(self.rating or "0")


class ProductCreate(CamelModel):
    """
    Request to create a product.

    Rating, review count, favorite flag and timestamps are owned by the
    store, so they are not part of this schema and are dropped if sent.
    """
    name: str = Field(min_length=1)
    description: str
    price: str
    original_price: Optional[str] = None
    category: str = Field(min_length=1)
    image_url: str
    badge: Optional[Badge] = None

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, value):
        return normalize_price(value)

    @field_validator("original_price", mode="before")
    @classmethod
    def _check_original_price(cls, value):
        return normalize_optional_price(value)

    @field_validator("badge", mode="before")
    @classmethod
    def _empty_badge(cls, value):
        return value or None


class ProductUpdate(CamelModel):
    """Partial product update. Only fields present in the request are applied."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[str] = None
    original_price: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    badge: Optional[Badge] = None
    is_favorite: Optional[bool] = None

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, value):
        return None if value is None else normalize_price(value)

    @field_validator("original_price", mode="before")
    @classmethod
    def _check_original_price(cls, value):
        return normalize_optional_price(value)

    @field_validator("badge", mode="before")
    @classmethod
    def _empty_badge(cls, value):
        return value or None


class ProductFilter(CamelModel):
    """Listing filters. Filters apply before sorting."""
    category: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort_by: Optional[str] = None
