"""
Payment Providers

Wrappers around the payment widgets offered at checkout. Every provider
exposes the same capability: initiate a payment for an amount and get back
either a provider reference or an error.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional, Any

import httpx

from .models import PaymentMethod, ProviderResult, ProviderSuccess, ProviderFailure

logger = logging.getLogger(__name__)


class ProviderRequestError(Exception):
    """Base exception for payment provider errors"""
    pass


class PaymentProvider(ABC):
    """Capability shared by all payment providers"""

    method: PaymentMethod

    @abstractmethod
    async def initiate(
        self,
        amount: float,
        config: Optional[dict[str, Any]] = None,
    ) -> ProviderResult:
        """
        Start or confirm a payment.

        Never raises for a declined or failed payment; returns a
        ProviderFailure instead.
        """

    async def close(self) -> None:
        """Release any held resources"""


class PayPalProvider(PaymentProvider):
    """
    PayPal Orders API provider.

    The buyer approves the order in the PayPal widget; the approval token
    (the PayPal order id) is then captured server-side. A completed capture
    settles immediately.

    Usage:
        provider = PayPalProvider(
            api_base="https://api-m.sandbox.paypal.com",
            client_id="...",
            client_secret="...",
        )
        result = await provider.initiate(380.0, {"approval_token": "5O190127TN364715T"})
    """

    method = PaymentMethod.PAYPAL

    def __init__(
        self,
        api_base: str,
        client_id: str,
        client_secret: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = api_base.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._access_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _refresh_token(self) -> None:
        """Fetch an OAuth2 client-credentials token if the cached one is stale"""
        now = datetime.utcnow()

        if self._access_token and self._token_expires_at:
            if now < self._token_expires_at - timedelta(minutes=5):
                return

        response = await self._http_client.post(
            f"{self.base_url}/v1/oauth2/token",
            auth=(self._client_id, self._client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )

        if response.status_code != 200:
            raise ProviderRequestError(
                f"PayPal token request failed: {response.status_code} - {response.text}"
            )

        try:
            result = response.json()
            self._access_token = result["access_token"]
            expires_in = int(result.get("expires_in", 3600))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ProviderRequestError(f"Malformed PayPal token response: {response.text}") from e

        self._token_expires_at = now + timedelta(seconds=expires_in)
        logger.info("Refreshed PayPal access token")

    async def capture_order(self, approval_token: str) -> dict[str, Any]:
        """Capture a buyer-approved PayPal order"""
        await self._refresh_token()

        response = await self._http_client.post(
            f"{self.base_url}/v2/checkout/orders/{approval_token}/capture",
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Content-Type": "application/json",
            },
        )

        if response.status_code == 401:
            # Token revoked early, refresh and retry once
            self._access_token = None
            await self._refresh_token()
            response = await self._http_client.post(
                f"{self.base_url}/v2/checkout/orders/{approval_token}/capture",
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "Content-Type": "application/json",
                },
            )

        if response.status_code >= 400:
            raise ProviderRequestError(
                f"PayPal capture failed: {response.status_code} - {response.text}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise ProviderRequestError(f"Malformed PayPal capture response: {response.text}") from e
        if not isinstance(result, dict):
            raise ProviderRequestError(f"Malformed PayPal capture response: {response.text}")
        return result

    async def initiate(
        self,
        amount: float,
        config: Optional[dict[str, Any]] = None,
    ) -> ProviderResult:
        config = config or {}
        approval_token = config.get("approval_token")

        if amount <= 0:
            return ProviderFailure(self.method, f"Invalid amount: {amount}")

        if not approval_token:
            return ProviderFailure(self.method, "Missing PayPal approval token")

        try:
            result = await self.capture_order(approval_token)
        except (ProviderRequestError, httpx.HTTPError) as e:
            logger.error(f"PayPal capture error for {approval_token}: {e}")
            return ProviderFailure(self.method, e)

        status = result.get("status")
        if status != "COMPLETED":
            logger.warning(f"PayPal order {approval_token} not completed: {status}")
            return ProviderFailure(self.method, f"PayPal order status is {status}")

        logger.info(f"PayPal order {approval_token} captured for {amount:.2f}")
        return ProviderSuccess(self.method, reference=approval_token)


class GCashProvider(PaymentProvider):
    """
    GCash provider.

    The customer sends funds through the GCash app and staff verify the
    transfer later, so the provider only acknowledges the intent. Any
    reference number the customer typed in is passed through.
    """

    method = PaymentMethod.GCASH

    async def initiate(
        self,
        amount: float,
        config: Optional[dict[str, Any]] = None,
    ) -> ProviderResult:
        config = config or {}

        if amount <= 0:
            return ProviderFailure(self.method, f"Invalid amount: {amount}")

        return ProviderSuccess(self.method, reference=config.get("reference"))


class PaymentProviderRegistry:
    """Maps payment methods to configured providers"""

    def __init__(self, providers: Optional[list[PaymentProvider]] = None):
        self._providers: dict[PaymentMethod, PaymentProvider] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: PaymentProvider) -> None:
        self._providers[provider.method] = provider

    def get(self, method: PaymentMethod) -> Optional[PaymentProvider]:
        return self._providers.get(method)

    @property
    def methods(self) -> list[PaymentMethod]:
        return list(self._providers)

    async def close(self) -> None:
        for provider in self._providers.values():
            await provider.close()
