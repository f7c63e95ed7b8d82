"""Category models for the storefront catalog"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class Category(CamelModel):
    """Product category. Inactive categories are hidden, not deleted."""
    id: int
    name: str
    is_active: bool = True


class CategoryCreate(CamelModel):
    """Request to create a category"""
    name: str = Field(min_length=1)
    is_active: Optional[bool] = None
