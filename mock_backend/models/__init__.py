# Mock Backend Models

from .order import (
    Order,
    OrderLine,
    OrderItem,
    PaymentStatus,
    ActivityRecord,
    CreateOrderRequest,
    CreateOrderItemsRequest,
    UpdatePaymentStatusRequest,
)
from .cart import CartItemsRequest, CartResponse
from .payment import PayPalTransaction, PayPalPayment, StoredPayment

__all__ = [
    "Order",
    "OrderLine",
    "OrderItem",
    "PaymentStatus",
    "ActivityRecord",
    "CreateOrderRequest",
    "CreateOrderItemsRequest",
    "UpdatePaymentStatusRequest",
    "CartItemsRequest",
    "CartResponse",
    "PayPalTransaction",
    "PayPalPayment",
    "StoredPayment",
]
