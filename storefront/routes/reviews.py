"""Product review API routes"""

from fastapi import APIRouter, Depends

from ..database.store import CatalogStore
from ..models.review import Review, ReviewCreate
from .dependencies import get_store

router = APIRouter(prefix="/api/products", tags=["Reviews"])


@router.get("/{product_id}/reviews", response_model=list[Review])
async def list_reviews(product_id: int, store: CatalogStore = Depends(get_store)):
    """List a product's reviews, oldest first"""
    return store.list_reviews(product_id)


@router.post("/{product_id}/reviews", response_model=Review, status_code=201)
async def create_review(
    product_id: int,
    request: ReviewCreate,
    store: CatalogStore = Depends(get_store),
):
    """
    Review a product.

    The product's rating and review count are recomputed from its reviews.
    """
    return store.create_review(product_id, request)
