"""Payment record models for the mock restaurant backend"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PayPalTransaction(BaseModel):
    """PayPal transaction receipt; amounts are in minor units"""
    amount: int = Field(ge=0)
    description: str = ""
    remarks: str = ""
    transaction_id: Optional[str] = None
    checkout_url: Optional[str] = None
    payment_method: str
    user_id: str
    order_quantity: int = Field(ge=0, default=0)
    menu_img: str = ""


class PayPalPayment(BaseModel):
    """PayPal payment record; amounts are in minor units"""
    user_id: str
    amount_paid: int = Field(ge=0)
    payment_method: str
    payment_status: str
    transaction_id: Optional[str] = None


class StoredPayment(PayPalPayment):
    """Payment record as kept by the backend"""
    payment_id: str
    payment_date: datetime
