# Core modules

from .config import settings
from .cart_store import CartStore, CartSnapshot
from .session import SessionManager, CustomerSession

__all__ = ["settings", "CartStore", "CartSnapshot", "SessionManager", "CustomerSession"]
