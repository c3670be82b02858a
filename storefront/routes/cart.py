"""Cart API routes for the storefront"""

from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, Depends

from ..core.cart_store import CartSnapshot
from ..core.session import CustomerSession
from ..models import CartLineItem
from .dependencies import require_session

router = APIRouter(prefix="/api/cart", tags=["Cart"])


class CartResponse(BaseModel):
    """Cart API response"""
    version: int
    items: list[CartLineItem]
    item_count: int
    total: float
    message: Optional[str] = None


class RemoveItemsRequest(BaseModel):
    """Items to drop from the cart"""
    items: list[CartLineItem]


def _cart_response(snapshot: CartSnapshot, message: Optional[str] = None) -> CartResponse:
    return CartResponse(
        version=snapshot.version,
        items=list(snapshot.items),
        item_count=snapshot.item_count,
        total=snapshot.total,
        message=message,
    )


@router.get("", response_model=CartResponse)
async def get_cart(session: CustomerSession = Depends(require_session)):
    """Get the customer's cart"""
    return _cart_response(session.cart.snapshot())


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    item: CartLineItem,
    session: CustomerSession = Depends(require_session),
):
    """Add an item to the cart"""
    item = item.model_copy(update={"user_id": session.user_id})
    snapshot = session.cart.add_item(item)
    return _cart_response(
        snapshot,
        message=f"Added {item.quantity}x {item.item_name} to cart",
    )


@router.delete("/items", response_model=CartResponse)
async def remove_from_cart(
    request: RemoveItemsRequest,
    session: CustomerSession = Depends(require_session),
):
    """Remove items from the cart"""
    items = [item.model_copy(update={"user_id": session.user_id}) for item in request.items]
    snapshot = session.cart.remove_items(items)
    return _cart_response(snapshot, message="Items removed")


@router.delete("", response_model=CartResponse)
async def clear_cart(session: CustomerSession = Depends(require_session)):
    """Clear all items from cart"""
    return _cart_response(session.cart.clear(), message="Cart cleared")
