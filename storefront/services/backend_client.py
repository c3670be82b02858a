"""
Restaurant Backend Client

HTTP client for the restaurant REST backend that persists orders, carts,
activity and payment records.
"""

import logging
from typing import Optional, Any

import httpx

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend call failed: transport error, error status, or bad body"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def diagnostic(self) -> Any:
        """Richest available detail for logs"""
        return self.payload if self.payload is not None else self.message


def server_message(payload: Any) -> Optional[str]:
    """Pull the human-readable message out of a backend error body"""
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class RestaurantApiClient:
    """
    Client for the restaurant backend.

    Every call either returns the decoded JSON body or raises BackendError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            base_url: Base URL of the restaurant API
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests and in-process setups)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON response"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers={"Accept": "application/json"},
                json=body,
            )
        except httpx.TimeoutException as e:
            raise BackendError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            raise BackendError(f"Request to {path} failed: {e}") from e

        try:
            payload = response.json() if response.content else None
        except ValueError:
            payload = None
            if response.status_code < 400:
                raise BackendError(
                    f"Malformed response from {path}",
                    status_code=response.status_code,
                    payload=response.text,
                )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise BackendError(
                server_message(payload)
                or f"Request to {path} failed with status {response.status_code}",
                status_code=response.status_code,
                payload=payload if payload is not None else response.text,
            )

        return payload

    # ==================== Order APIs ====================

    async def create_order(
        self,
        user_id: str,
        order_data: list[dict],
        payment_method: str,
    ) -> Optional[str]:
        """Create an order and return its ID, if the backend assigned one"""
        result = await self._request(
            "POST",
            f"/create_order/{user_id}",
            body={"orderData": order_data, "payment_method": payment_method},
        )
        if not isinstance(result, dict):
            return None
        order_id = result.get("orderId")
        return str(order_id) if order_id not in (None, "") else None

    async def create_order_items(self, user_id: str, order_items: list[dict]) -> Any:
        """Attach line items to an existing order"""
        return await self._request(
            "POST",
            f"/create_order_items/{user_id}",
            body={"orderItems": order_items},
        )

    async def update_payment_status(self, order_id: str, payment_status: str) -> Any:
        """Move an order's payment status"""
        return await self._request(
            "POST",
            f"/update_payment_status/{order_id}",
            body={"paymentStatus": payment_status},
        )

    # ==================== Activity APIs ====================

    async def record_activity(self, user_id: str, activity_date: str, order_id: str) -> Any:
        """Append a customer activity entry"""
        return await self._request(
            "POST",
            f"/activity_user/{user_id}",
            body={
                "user_id": user_id,
                "activity_date": activity_date,
                "order_id": order_id,
            },
        )

    # ==================== Cart APIs ====================

    async def remove_from_cart(self, user_id: str, items: list[dict]) -> Any:
        """Remove exactly these items from the customer's persisted cart"""
        return await self._request(
            "POST",
            f"/remove_from_cart/{user_id}",
            body={"items": items},
        )

    # ==================== Payment APIs ====================

    async def record_paypal_transaction(self, transaction: dict) -> Any:
        """Store a PayPal transaction receipt"""
        return await self._request("POST", "/paypal_transaction", body=transaction)

    async def record_paypal_payment(self, payment: dict) -> Any:
        """Store a PayPal payment record"""
        return await self._request("POST", "/paypal_payment", body=payment)
