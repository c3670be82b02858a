# Payment Providers

from .models import (
    PaymentMethod,
    SettlementMode,
    ProviderResult,
    ProviderSuccess,
    ProviderFailure,
)
from .providers import (
    PaymentProvider,
    ProviderRequestError,
    PayPalProvider,
    GCashProvider,
    PaymentProviderRegistry,
)

__all__ = [
    "PaymentMethod",
    "SettlementMode",
    "ProviderResult",
    "ProviderSuccess",
    "ProviderFailure",
    "PaymentProvider",
    "ProviderRequestError",
    "PayPalProvider",
    "GCashProvider",
    "PaymentProviderRegistry",
]
