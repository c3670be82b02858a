"""Cart API routes for the mock restaurant backend"""

from fastapi import APIRouter

from ..models.cart import CartItemsRequest, CartResponse
from ..database.carts import cart_db

router = APIRouter(tags=["Cart"])


@router.get("/get_cart/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str):
    """Get a user's persisted cart"""
    return CartResponse(user_id=user_id, items=cart_db.get_cart(user_id))


@router.post("/add_to_cart/{user_id}", response_model=CartResponse)
async def add_to_cart(user_id: str, request: CartItemsRequest):
    """Add items to a user's persisted cart"""
    return CartResponse(user_id=user_id, items=cart_db.add_items(user_id, request.items))


@router.post("/remove_from_cart/{user_id}", response_model=CartResponse)
async def remove_from_cart(user_id: str, request: CartItemsRequest):
    """Remove exactly the given items from a user's persisted cart"""
    return CartResponse(user_id=user_id, items=cart_db.remove_items(user_id, request.items))
