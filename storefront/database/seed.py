"""Demonstration catalog loaded at startup"""

from ..models.category import CategoryCreate
from ..models.product import Badge, ProductCreate
from ..models.review import ReviewCreate
from .store import CatalogSeed, SeedProduct

_IMAGE_QUERY = (
    "?ixlib=rb-4.0.3&ixid=M3wxMjA3fDB8MHxwaG90by1wYWdlfHx8fGVufDB8fHx8fA%3D%3D"
    "&auto=format&fit=crop&w=800&h=800"
)


def _unsplash(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}{_IMAGE_QUERY}"


DEMO_CATEGORIES = [
    CategoryCreate(name="Electronics"),
    CategoryCreate(name="Clothing"),
    CategoryCreate(name="Home"),
    CategoryCreate(name="Books"),
]

DEMO_PRODUCTS = [
    SeedProduct(ProductCreate(
        name="Premium Wireless Headphones",
        description="High-quality wireless headphones with noise cancellation and premium sound quality.",
        price="299.00",
        original_price="399.00",
        category="Electronics",
        image_url=_unsplash("photo-1505740420928-5e560c06d30e"),
        badge=Badge.BEST_SELLER,
    )),
    SeedProduct(ProductCreate(
        name="Smart Watch Pro",
        description="Advanced fitness tracking with heart rate monitoring and GPS functionality.",
        price="459.00",
        category="Electronics",
        image_url=_unsplash("photo-1523275335684-37898b6baf30"),
        badge=Badge.NEW,
    )),
    SeedProduct(ProductCreate(
        name="Ultra-thin Laptop",
        description="Powerful performance in an ultra-portable design. Perfect for professionals on the go.",
        price="1299.00",
        original_price="1499.00",
        category="Electronics",
        image_url=_unsplash("photo-1496181133206-80ce9b88a853"),
        badge=Badge.LIMITED,
    )),
    SeedProduct(
        ProductCreate(
            name="Smartphone X",
            description="Latest flagship smartphone with advanced camera system and lightning-fast performance.",
            price="899.00",
            category="Electronics",
            image_url=_unsplash("photo-1511707171634-5f897ff02aa9"),
        ),
        is_favorite=True,
    ),
    SeedProduct(ProductCreate(
        name="Leather Handbag",
        description="Handcrafted genuine leather handbag with premium quality and timeless design.",
        price="189.00",
        category="Clothing",
        image_url=_unsplash("photo-1553062407-98eeb64c6a62"),
    )),
    SeedProduct(ProductCreate(
        name="Vintage Camera",
        description="Classic vintage camera perfect for film photography enthusiasts and collectors.",
        price="349.00",
        category="Electronics",
        image_url=_unsplash("photo-1606983340126-99ab4feaa64a"),
        badge=Badge.VINTAGE,
    )),
]

DEMO_REVIEWS = [
    (1, ReviewCreate(
        user_name="John Doe",
        rating=5,
        comment="Great product! Really satisfied with the quality and performance.",
    )),
    (1, ReviewCreate(
        user_name="Jane Smith",
        rating=4,
        comment="Good headphones, but could be more comfortable for long sessions.",
    )),
]


def demo_seed() -> CatalogSeed:
    """Build the demonstration seed. Product ids follow list order, starting at 1."""
    return CatalogSeed(
        categories=list(DEMO_CATEGORIES),
        products=list(DEMO_PRODUCTS),
        reviews=list(DEMO_REVIEWS),
    )
