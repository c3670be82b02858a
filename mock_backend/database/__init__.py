# Mock Backend Database (in-memory)

from .orders import order_db, OrderDatabase
from .carts import cart_db, CartDatabase
from .payments import payment_db, PaymentDatabase

__all__ = [
    "order_db",
    "OrderDatabase",
    "cart_db",
    "CartDatabase",
    "payment_db",
    "PaymentDatabase",
]
