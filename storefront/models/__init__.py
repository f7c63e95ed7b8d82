# Storefront Models

from .product import (
    ALL_CATEGORIES,
    Badge,
    Product,
    ProductCreate,
    ProductFilter,
    ProductUpdate,
    SortOption,
)
from .category import Category, CategoryCreate
from .review import Review, ReviewCreate
from .cart import (
    AddToCartRequest,
    CartCountResponse,
    CartItem,
    CartItemWithProduct,
    ClearCartResponse,
    UpdateCartItemRequest,
)

__all__ = [
    "ALL_CATEGORIES",
    "Badge",
    "Product",
    "ProductCreate",
    "ProductFilter",
    "ProductUpdate",
    "SortOption",
    "Category",
    "CategoryCreate",
    "Review",
    "ReviewCreate",
    "AddToCartRequest",
    "CartCountResponse",
    "CartItem",
    "CartItemWithProduct",
    "ClearCartResponse",
    "UpdateCartItemRequest",
]
