"""Review models for the storefront catalog"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class Review(CamelModel):
    """Customer review of a product"""
    id: int
    product_id: int
    user_name: str
    rating: int = Field(ge=1, le=5)
    comment: str
    created_at: datetime


class ReviewCreate(CamelModel):
    """Request to review a product. The product id comes from the URL."""
    user_name: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1)
