"""Cart models for the storefront"""

from pydantic import Field

from .base import CamelModel
from .product import Product


class CartItem(CamelModel):
    """One cart line. A session holds at most one line per product."""
    id: int
    product_id: int
    quantity: int
    session_id: str


class CartItemWithProduct(CartItem):
    """Cart line joined with its product at read time"""
    product: Product


class AddToCartRequest(CamelModel):
    """Request to add an item to a session's cart"""
    product_id: int
    session_id: str = Field(min_length=1)
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(CamelModel):
    """Request to set a cart line's quantity. Below 1 removes the line."""
    quantity: int


class CartCountResponse(CamelModel):
    """Total item count for a session's cart"""
    session_id: str
    count: int


class ClearCartResponse(CamelModel):
    success: bool
    session_id: str
