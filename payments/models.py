"""Payment provider data models"""

from dataclasses import dataclass
from typing import Any, Optional, Union
from enum import Enum


class SettlementMode(str, Enum):
    """When the provider confirms that funds have moved"""
    IMMEDIATE = "immediate"  # Provider confirms the transfer synchronously
    DEFERRED = "deferred"  # Funds are verified manually after the order


class PaymentMethod(str, Enum):
    """Payment methods offered at checkout"""
    PAYPAL = "PayPal"
    GCASH = "GCash"

    @property
    def settlement(self) -> SettlementMode:
        if self is PaymentMethod.PAYPAL:
            return SettlementMode.IMMEDIATE
        return SettlementMode.DEFERRED

    @property
    def settles_immediately(self) -> bool:
        return self.settlement == SettlementMode.IMMEDIATE


@dataclass(frozen=True)
class ProviderSuccess:
    """Provider accepted the payment"""
    method: PaymentMethod
    reference: Optional[str] = None  # Opaque provider transaction reference

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ProviderFailure:
    """Provider rejected the payment or could not be reached"""
    method: PaymentMethod
    error: Any = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if isinstance(self.error, BaseException):
            return str(self.error) or type(self.error).__name__
        return str(self.error) if self.error is not None else "Payment failed"


ProviderResult = Union[ProviderSuccess, ProviderFailure]
