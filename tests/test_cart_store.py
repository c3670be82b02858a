"""Tests for the versioned cart store and cart line items"""

import pytest
from pydantic import ValidationError

from storefront.core.cart_store import CartStore
from storefront.models import CartLineItem, CheckoutRequest
from payments.models import PaymentMethod


class TestCartLineItem:

    def test_defaults(self):
        item = CartLineItem(item_name="Rice", quantity=1, price=25)
        assert item.categories_name == "Uncategorized"
        assert item.size == "Normal size"
        assert item.menu_img == ""

    def test_empty_category_and_size_fall_back(self):
        item = CartLineItem(item_name="Rice", quantity=1, price=25, categories_name="", size=None)
        assert item.categories_name == "Uncategorized"
        assert item.size == "Normal size"

    @pytest.mark.parametrize("quantity, price", [(0, 10), (-1, 10), (1, -0.5)])
    def test_rejects_invalid_quantity_or_price(self, quantity, price):
        with pytest.raises(ValidationError):
            CartLineItem(item_name="Rice", quantity=quantity, price=price)

    def test_line_total(self, burger):
        assert burger.line_total == 300


class TestCheckoutRequest:

    def test_totals(self, burger, fries):
        request = CheckoutRequest(
            user_id="user-1",
            items=(burger, fries),
            payment_method=PaymentMethod.PAYPAL,
        )
        assert request.grand_total == 380
        assert request.amount_minor_units == 38000
        assert request.order_quantity == 3
        assert request.lead_image == "burger.png"

    def test_requires_items(self):
        with pytest.raises(ValidationError):
            CheckoutRequest(user_id="user-1", items=(), payment_method=PaymentMethod.GCASH)


class TestCartStore:

    def test_snapshot_is_stable_across_writes(self, cart_store, burger):
        before = cart_store.snapshot()
        cart_store.remove_items([burger])

        assert burger in before.items
        assert burger not in cart_store.items
        assert cart_store.version == before.version + 1

    def test_remove_items_is_order_independent(self, cart_store, burger, fries, soda):
        cart_store.remove_items([fries, burger])
        assert cart_store.items == (soda,)

    def test_remove_items_ignores_unknown(self, cart_store, burger, fries, soda):
        stranger = CartLineItem(item_name="Cake", quantity=1, price=99)
        cart_store.remove_items([stranger])
        assert cart_store.items == (burger, soda, fries)

    def test_same_item_different_size_survives(self, burger):
        large = burger.model_copy(update={"size": "Large"})
        store = CartStore([burger, large])

        store.remove_items([burger])

        assert store.items == (large,)

    def test_add_and_clear(self, burger):
        store = CartStore()
        store.add_item(burger)
        assert store.snapshot().item_count == 2
        assert store.snapshot().total == 300

        store.clear()
        assert store.items == ()
        assert store.version == 2
