"""Cart API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..database.store import CatalogStore
from ..models.cart import (
    AddToCartRequest,
    CartCountResponse,
    CartItem,
    CartItemWithProduct,
    ClearCartResponse,
    UpdateCartItemRequest,
)
from .dependencies import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("/{session_id}", response_model=list[CartItemWithProduct])
async def get_cart(session_id: str, store: CatalogStore = Depends(get_store)):
    """Get a session's cart with product details"""
    return store.list_cart_items(session_id)


@router.get("/{session_id}/count", response_model=CartCountResponse)
async def get_cart_count(session_id: str, store: CatalogStore = Depends(get_store)):
    """Total quantity in a session's cart"""
    return CartCountResponse(session_id=session_id, count=store.cart_count(session_id))


@router.post("", response_model=CartItem, status_code=201)
async def add_to_cart(request: AddToCartRequest, store: CatalogStore = Depends(get_store)):
    """Add a product to a session's cart, merging with an existing line"""
    if not store.get_product(request.product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return store.add_to_cart(request)


@router.put("/{item_id}", response_model=CartItem)
async def update_cart_item(
    item_id: int,
    request: UpdateCartItemRequest,
    store: CatalogStore = Depends(get_store),
):
    """
    Set a cart line's quantity.

    A quantity below 1 removes the line and returns 204.
    """
    if request.quantity < 1:
        if not store.remove_from_cart(item_id):
            raise HTTPException(status_code=404, detail="Cart item not found")
        logger.info(f"Removed cart item {item_id} on quantity {request.quantity}")
        return Response(status_code=204)

    item = store.update_cart_item(item_id, request.quantity)
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item


@router.delete("/clear/{session_id}", response_model=ClearCartResponse)
async def clear_cart(session_id: str, store: CatalogStore = Depends(get_store)):
    """Remove every line from a session's cart"""
    return ClearCartResponse(success=store.clear_cart(session_id), session_id=session_id)


@router.delete("/{item_id}", status_code=204)
async def remove_from_cart(item_id: int, store: CatalogStore = Depends(get_store)):
    """Remove a cart line"""
    if not store.remove_from_cart(item_id):
        raise HTTPException(status_code=404, detail="Cart item not found")
    return Response(status_code=204)
