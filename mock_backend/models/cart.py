"""Cart models for the mock restaurant backend"""

from pydantic import BaseModel

from .order import OrderLine


class CartItemsRequest(BaseModel):
    """Items to add to or remove from a persisted cart"""
    items: list[OrderLine]


class CartResponse(BaseModel):
    """Persisted cart"""
    user_id: str
    items: list[OrderLine] = []
