"""Shared fixtures for storefront checkout tests"""

import json
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from storefront.core.cart_store import CartStore
from storefront.models import CartLineItem
from storefront.services.backend_client import RestaurantApiClient
from storefront.services.checkout import CheckoutObserver, CheckoutOrchestrator, Notification

BACKEND_URL = "http://backend.test"
USER_ID = "user-1"


class FakeBackend:
    """
    Restaurant backend stand-in behind an httpx.MockTransport.

    Records every call in order; individual endpoints can be made to fail
    or to answer with a custom response.
    """

    def __init__(self, order_id: Optional[str] = "ORD-1"):
        self.order_id = order_id
        self.calls: list[tuple[str, str, Any]] = []
        self.responses: dict[str, httpx.Response] = {}
        self.errors: dict[str, Exception] = {}

    def fail(self, endpoint: str, status_code: int = 500, body: Any = None) -> None:
        """Answer ``endpoint`` with an error status"""
        self.responses[endpoint] = httpx.Response(
            status_code,
            json=body if body is not None else {"error": f"{endpoint} exploded"},
        )

    def raise_on(self, endpoint: str, error: Exception) -> None:
        """Raise a transport error for ``endpoint``"""
        self.errors[endpoint] = error

    @property
    def endpoints(self) -> list[str]:
        return [endpoint for _, endpoint, _ in self.calls]

    def body_for(self, endpoint: str) -> Any:
        return next(body for _, e, body in self.calls if e == endpoint)

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.strip("/").split("/")[0]
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, endpoint, body))

        if endpoint in self.errors:
            raise self.errors[endpoint]
        if endpoint in self.responses:
            return self.responses[endpoint]
        if endpoint == "create_order":
            return httpx.Response(200, json={"orderId": self.order_id})
        return httpx.Response(200, json={"message": "ok"})


class RecordingObserver(CheckoutObserver):
    """Observer that remembers everything the orchestrator told the view"""

    def __init__(self):
        self.events: list[tuple[str, Any]] = []

    def set_loading(self, loading: bool) -> None:
        self.events.append(("loading", loading))

    def dismiss(self) -> None:
        self.events.append(("dismiss", None))

    def notify(self, notification: Notification) -> None:
        self.events.append(("notify", notification))

    @property
    def notifications(self) -> list[Notification]:
        return [value for kind, value in self.events if kind == "notify"]

    @property
    def loading(self) -> Optional[bool]:
        states = [value for kind, value in self.events if kind == "loading"]
        return states[-1] if states else None


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def api_client(backend):
    client = RestaurantApiClient(
        base_url=BACKEND_URL,
        timeout=5.0,
        transport=httpx.MockTransport(backend.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def burger() -> CartLineItem:
    return CartLineItem(
        user_id=USER_ID,
        item_name="Burger",
        quantity=2,
        price=150,
        menu_img="burger.png",
        categories_name="Mains",
    )


@pytest.fixture
def fries() -> CartLineItem:
    return CartLineItem(user_id=USER_ID, item_name="Fries", quantity=1, price=80)


@pytest.fixture
def soda() -> CartLineItem:
    return CartLineItem(user_id=USER_ID, item_name="Soda", quantity=3, price=40, size="Large")


@pytest.fixture
def cart_store(burger, fries, soda) -> CartStore:
    return CartStore([burger, soda, fries])


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def orchestrator(api_client, cart_store, observer) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(
        client=api_client,
        cart_store=cart_store,
        identity=lambda: USER_ID,
        observer=observer,
    )
