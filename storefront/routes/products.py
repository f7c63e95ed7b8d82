"""Product API routes"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..database.store import CatalogStore
from ..models.product import Product, ProductCreate, ProductFilter, ProductUpdate
from .dependencies import get_store

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=list[Product])
async def list_products(
    category: Optional[str] = Query(None, description="Exact category name"),
    search: Optional[str] = Query(None, description="Substring of name or description"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Sort option label"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    store: CatalogStore = Depends(get_store),
):
    """
    List products in the catalog.

    Filters apply before sorting. Pagination is left to the client.
    """
    filters = ProductFilter(
        category=category,
        search=search,
        sort_by=sort_by,
        min_price=min_price,
        max_price=max_price,
    )
    return store.list_products(filters)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: int, store: CatalogStore = Depends(get_store)):
    """Get a product by ID"""
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=201)
async def create_product(request: ProductCreate, store: CatalogStore = Depends(get_store)):
    """Create a product"""
    return store.create_product(request)


@router.put("/{product_id}", response_model=Product)
@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: int,
    request: ProductUpdate,
    store: CatalogStore = Depends(get_store),
):
    """Update the provided fields of a product"""
    product = store.update_product(product_id, request)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: int, store: CatalogStore = Depends(get_store)):
    """Delete a product"""
    if not store.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)


@router.post("/{product_id}/toggle-favorite", response_model=Product)
async def toggle_favorite(product_id: int, store: CatalogStore = Depends(get_store)):
    """Flip a product's favorite flag"""
    product = store.toggle_favorite(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
