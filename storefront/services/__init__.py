# Storefront services

from .backend_client import RestaurantApiClient, BackendError
from .checkout import (
    CheckoutOrchestrator,
    CheckoutObserver,
    CheckoutOutcome,
    CheckoutState,
    CheckoutError,
    IdentityMissing,
    EmptyCart,
    OrderCreationFailed,
    DownstreamStepFailed,
    PaymentProviderError,
    CheckoutBusy,
    Notification,
)

__all__ = [
    "RestaurantApiClient",
    "BackendError",
    "CheckoutOrchestrator",
    "CheckoutObserver",
    "CheckoutOutcome",
    "CheckoutState",
    "CheckoutError",
    "IdentityMissing",
    "EmptyCart",
    "OrderCreationFailed",
    "DownstreamStepFailed",
    "PaymentProviderError",
    "CheckoutBusy",
    "Notification",
]
