"""Category API routes"""

from fastapi import APIRouter, Depends, HTTPException

from ..database.store import CatalogStore
from ..models.category import Category, CategoryCreate
from .dependencies import get_store

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=list[Category])
async def list_categories(store: CatalogStore = Depends(get_store)):
    """List active categories"""
    return store.list_categories()


@router.post("", response_model=Category, status_code=201)
async def create_category(request: CategoryCreate, store: CatalogStore = Depends(get_store)):
    """Create a category"""
    if store.get_category_by_name(request.name):
        raise HTTPException(status_code=409, detail="Category already exists")
    return store.create_category(request)
