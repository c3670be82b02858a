"""Shared route dependencies for the storefront"""

from typing import Optional
from fastapi import Header, HTTPException, Depends

from payments.providers import PaymentProviderRegistry, PayPalProvider, GCashProvider

from ..core.config import settings
from ..core.cart_store import CartStore
from ..core.session import session_manager, decode_session_token, CustomerSession
from ..services.backend_client import RestaurantApiClient
from ..services.checkout import CheckoutOrchestrator

# Initialize services (replaced through dependency overrides in tests)
backend_client: Optional[RestaurantApiClient] = None
payment_registry: Optional[PaymentProviderRegistry] = None


def get_backend_client() -> RestaurantApiClient:
    """Get or create backend client"""
    global backend_client
    if backend_client is None:
        backend_client = RestaurantApiClient(
            base_url=settings.backend_base_url,
            timeout=settings.request_timeout_seconds,
        )
    return backend_client


def get_payment_registry() -> PaymentProviderRegistry:
    """Get or create the registry of configured payment providers"""
    global payment_registry
    if payment_registry is None:
        payment_registry = PaymentProviderRegistry()
        if settings.paypal_configured:
            payment_registry.register(
                PayPalProvider(
                    api_base=settings.paypal_api_base,
                    client_id=settings.paypal_client_id,
                    client_secret=settings.get_paypal_client_secret(),
                    timeout=settings.request_timeout_seconds,
                )
            )
        if settings.gcash_enabled:
            payment_registry.register(GCashProvider())
    return payment_registry


def get_current_user_id(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract the customer ID from a bearer session token"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return decode_session_token(token.strip())


def require_session(
    user_id: Optional[str] = Depends(get_current_user_id),
) -> CustomerSession:
    """Session of the signed-in customer; 401 otherwise"""
    if not user_id:
        raise HTTPException(status_code=401, detail="Sign in required")
    return session_manager.get_or_create_session(user_id)


def get_orchestrator(
    user_id: Optional[str] = Depends(get_current_user_id),
    client: RestaurantApiClient = Depends(get_backend_client),
) -> CheckoutOrchestrator:
    """
    Checkout orchestrator for the caller.

    Signed-in customers keep one orchestrator for the life of their session
    so the busy guard spans requests. Anonymous callers get a throwaway one
    that reports the missing identity.
    """
    if not user_id:
        return CheckoutOrchestrator(
            client=client,
            cart_store=CartStore(),
            identity=lambda: None,
            paypal_checkout_url=settings.paypal_checkout_url,
        )

    session = session_manager.get_or_create_session(user_id)
    if session.checkout is None:
        session.checkout = CheckoutOrchestrator(
            client=client,
            cart_store=session.cart,
            identity=lambda: session.user_id,
            paypal_checkout_url=settings.paypal_checkout_url,
        )
    return session.checkout
