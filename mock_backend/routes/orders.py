"""Order API routes for the mock restaurant backend"""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException

from ..models.order import (
    Order,
    ActivityRecord,
    CreateOrderRequest,
    CreateOrderItemsRequest,
    UpdatePaymentStatusRequest,
)
from ..database.orders import order_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.post("/create_order/{user_id}")
async def create_order(user_id: str, request: CreateOrderRequest):
    """
    Create an order from the submitted line items.

    Every order starts pending; payment is confirmed separately through
    /update_payment_status.
    """
    if not request.order_data:
        raise HTTPException(status_code=400, detail="Order has no items")

    order = order_db.create_order(
        user_id=user_id,
        lines=request.order_data,
        payment_method=request.payment_method,
    )

    logger.info(
        f"Order {order.order_id} created for {user_id}: "
        f"{order.total:.2f} via {order.payment_method}"
    )
    return {"orderId": order.order_id}


@router.post("/create_order_items/{user_id}")
async def create_order_items(user_id: str, request: CreateOrderItemsRequest):
    """Attach line items to existing orders"""
    missing = order_db.add_items(request.order_items)
    if missing:
        raise HTTPException(
            status_code=404,
            detail=f"Order not found: {missing[0].order_id}",
        )
    return {"message": f"Added {len(request.order_items)} items"}


@router.post("/update_payment_status/{order_id}")
async def update_payment_status(order_id: str, request: UpdatePaymentStatusRequest):
    """Move an order's payment status"""
    order = order_db.update_payment_status(order_id, request.payment_status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    logger.info(f"Order {order_id} payment status: {order.payment_status.value}")
    return {"orderId": order.order_id, "paymentStatus": order.payment_status.value}


@router.post("/activity_user/{user_id}")
async def record_activity(user_id: str, record: ActivityRecord):
    """Append a customer activity entry"""
    if record.user_id != user_id:
        raise HTTPException(status_code=400, detail="User mismatch")
    if not order_db.get_order(record.order_id):
        raise HTTPException(status_code=404, detail="Order not found")

    order_db.record_activity(record)
    return {"message": "Activity recorded"}


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/orders", response_model=list[Order])
async def list_orders(user_id: Optional[str] = None, limit: int = 50):
    """List recent orders"""
    return order_db.list_orders(user_id=user_id, limit=limit)
