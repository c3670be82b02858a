"""
End-to-end tests for the storefront cart and checkout routes.

The storefront's backend client talks to the mock backend in-process
through httpx.ASGITransport.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from mock_backend.main import app as backend_app
from mock_backend.database import order_db, cart_db, payment_db
from mock_backend.models import PaymentStatus
from payments import GCashProvider, PaymentProviderRegistry, PayPalProvider

from storefront.main import app
from storefront.core.session import session_manager, issue_session_token
from storefront.routes.dependencies import get_backend_client, get_payment_registry
from storefront.services.backend_client import RestaurantApiClient
from storefront.services.checkout import PAYMENT_FAILED_MESSAGE, SUCCESS_MESSAGE

BURGER = {"item_name": "Burger", "quantity": 2, "price": 150, "menu_img": "burger.png"}
FRIES = {"item_name": "Fries", "quantity": 1, "price": 80}


def _paypal_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/v1/oauth2/token":
        return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
    if request.url.path.endswith("/FORGED/capture"):
        return httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})
    return httpx.Response(201, json={"status": "COMPLETED"})


@pytest.fixture(autouse=True)
def reset_state():
    session_manager.sessions.clear()
    order_db.reset()
    cart_db.reset()
    payment_db.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    backend_client = RestaurantApiClient(
        base_url="http://backend.test",
        transport=httpx.ASGITransport(app=backend_app),
    )
    registry = PaymentProviderRegistry([
        PayPalProvider(
            api_base="https://paypal.test",
            client_id="client",
            client_secret="secret",
            transport=httpx.MockTransport(_paypal_handler),
        ),
        GCashProvider(),
    ])
    app.dependency_overrides[get_backend_client] = lambda: backend_client
    app.dependency_overrides[get_payment_registry] = lambda: registry

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {issue_session_token('u1')}"}


def _fill_cart(client, auth):
    for item in (BURGER, FRIES):
        response = client.post("/api/cart/items", json=item, headers=auth)
        assert response.status_code == 200


class TestCartRoutes:

    def test_requires_sign_in(self, client):
        assert client.get("/api/cart").status_code == 401
        assert client.get("/api/cart", headers={"Authorization": "Bearer junk"}).status_code == 401

    def test_add_and_remove(self, client, auth):
        _fill_cart(client, auth)

        cart = client.get("/api/cart", headers=auth).json()
        assert cart["total"] == 380
        assert cart["item_count"] == 3
        assert cart["items"][0]["user_id"] == "u1"

        response = client.request("DELETE", "/api/cart/items", json={"items": [FRIES]}, headers=auth)
        assert [item["item_name"] for item in response.json()["items"]] == ["Burger"]

    def test_clear(self, client, auth):
        _fill_cart(client, auth)
        response = client.delete("/api/cart", headers=auth)
        assert response.json()["items"] == []


class TestCheckoutRoutes:

    def test_summary(self, client, auth):
        _fill_cart(client, auth)

        summary = client.get("/api/checkout/summary", headers=auth).json()
        assert summary["grand_total"] == 380
        assert summary["order_quantity"] == 3
        assert set(summary["payment_methods"]) == {"PayPal", "GCash"}

    def test_summary_empty_cart(self, client, auth):
        assert client.get("/api/checkout/summary", headers=auth).status_code == 400

    def test_paypal_pay_settles_order(self, client, auth):
        _fill_cart(client, auth)

        response = client.post(
            "/api/checkout/pay",
            json={"payment_method": "PayPal", "config": {"approval_token": "TXN123"}},
            headers=auth,
        )
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["state"] == "done"
        assert body["notifications"] == [{"level": "success", "message": SUCCESS_MESSAGE}]

        order = order_db.get_order(body["order_id"])
        assert order.payment_status == PaymentStatus.PAID
        assert len(order.items) == 2
        assert payment_db.payments[0].amount_paid == 38000
        assert payment_db.transactions[0].transaction_id == "TXN123"

        assert client.get("/api/cart", headers=auth).json()["items"] == []

    def test_gcash_callback_leaves_order_pending(self, client, auth):
        _fill_cart(client, auth)

        body = client.post(
            "/api/checkout/callback/success",
            json={"payment_method": "GCash"},
            headers=auth,
        ).json()

        assert body["success"] is True
        order = order_db.get_order(body["order_id"])
        assert order.payment_status == PaymentStatus.PENDING
        assert order_db.activity[0].order_id == body["order_id"]
        assert payment_db.payments == []
        assert client.get("/api/cart", headers=auth).json()["items"] == []

        status = client.get("/api/checkout/status", headers=auth).json()
        assert status["state"] == "done"
        assert "settling" not in status["history"]

    def test_paypal_callback_captures_before_settling(self, client, auth):
        _fill_cart(client, auth)

        body = client.post(
            "/api/checkout/callback/success",
            json={"payment_method": "PayPal", "provider_reference": "PP-APPROVED"},
            headers=auth,
        ).json()

        assert body["success"] is True
        assert order_db.get_order(body["order_id"]).payment_status == PaymentStatus.PAID
        assert payment_db.transactions[0].transaction_id == "PP-APPROVED"

    def test_paypal_callback_with_unknown_reference_places_nothing(self, client, auth):
        _fill_cart(client, auth)

        body = client.post(
            "/api/checkout/callback/success",
            json={"payment_method": "PayPal", "provider_reference": "FORGED"},
            headers=auth,
        ).json()

        assert body["success"] is False
        assert body["error_code"] == "payment_provider_error"
        assert order_db.orders == {}
        assert payment_db.payments == []
        assert len(client.get("/api/cart", headers=auth).json()["items"]) == 2

    def test_paypal_callback_without_reference(self, client, auth):
        _fill_cart(client, auth)

        body = client.post(
            "/api/checkout/callback/success",
            json={"payment_method": "PayPal"},
            headers=auth,
        ).json()

        assert body["error_code"] == "payment_provider_error"
        assert order_db.orders == {}

    def test_error_callback(self, client, auth):
        _fill_cart(client, auth)

        body = client.post(
            "/api/checkout/callback/error",
            json={"error": "popup closed"},
            headers=auth,
        ).json()

        assert body["success"] is False
        assert body["error_code"] == "payment_provider_error"
        assert body["notifications"] == [{"level": "error", "message": PAYMENT_FAILED_MESSAGE}]
        assert order_db.orders == {}
        assert len(client.get("/api/cart", headers=auth).json()["items"]) == 2

    def test_anonymous_checkout_reports_missing_identity(self, client):
        body = client.post(
            "/api/checkout/callback/success",
            json={"payment_method": "GCash"},
        ).json()

        assert body["success"] is False
        assert body["error_code"] == "identity_missing"
        assert order_db.orders == {}

    def test_pay_with_empty_cart(self, client, auth):
        response = client.post("/api/checkout/pay", json={"payment_method": "GCash"}, headers=auth)
        assert response.status_code == 400
