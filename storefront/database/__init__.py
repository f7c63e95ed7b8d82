# Database modules

from .store import CatalogStore, CatalogSeed, SeedProduct, average_rating
from .seed import demo_seed

__all__ = [
    "CatalogStore",
    "CatalogSeed",
    "SeedProduct",
    "average_rating",
    "demo_seed",
]
