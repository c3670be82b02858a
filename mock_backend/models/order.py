"""Order models for the mock restaurant backend"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class OrderLine(BaseModel):
    """Line item as submitted by the storefront"""
    user_id: Optional[str] = None
    item_name: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)
    menu_img: str = ""
    final_total: Optional[float] = None
    categories_name: str = "Uncategorized"
    size: str = "Normal size"


class OrderItem(OrderLine):
    """Line item attached to an order"""
    order_id: str


class CreateOrderRequest(BaseModel):
    """Request to create an order"""
    model_config = ConfigDict(populate_by_name=True)

    order_data: list[OrderLine] = Field(alias="orderData")
    payment_method: str


class CreateOrderItemsRequest(BaseModel):
    """Request to attach items to an order"""
    model_config = ConfigDict(populate_by_name=True)

    order_items: list[OrderItem] = Field(alias="orderItems")


class UpdatePaymentStatusRequest(BaseModel):
    """Request to move an order's payment status"""
    model_config = ConfigDict(populate_by_name=True)

    payment_status: PaymentStatus = Field(alias="paymentStatus")


class Order(BaseModel):
    """Order held by the backend"""
    order_id: str
    user_id: str
    payment_method: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    lines: list[OrderLine]
    items: list[OrderItem] = []
    total: float
    created_at: datetime
    updated_at: datetime


class ActivityRecord(BaseModel):
    """Customer activity entry"""
    user_id: str
    activity_date: datetime
    order_id: str
