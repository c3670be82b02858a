"""
Checkout Orchestrator

Turns a paid-for cart into an order on the restaurant backend:

1. create the order
2. attach its line items
3. record the customer activity
4. clear the persisted cart
5. settle the payment (immediately-settled methods only)

then dismisses the checkout view, announces success and drops the ordered
items from the local cart. Each step runs only after the previous one
succeeded. Nothing is rolled back: once the order exists, a later failure
is reported to the customer and the remaining steps are skipped.
"""

import asyncio
import logging
from datetime import datetime, timezone
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from payments.models import PaymentMethod, ProviderFailure
from payments.providers import PaymentProvider

from ..core.cart_store import CartStore
from ..models import CartLineItem, CheckoutRequest
from .backend_client import BackendError, RestaurantApiClient

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order placed successfully and cart cleared!"
PAYMENT_FAILED_MESSAGE = "Payment failed, please try again."
DEFAULT_PAYPAL_CHECKOUT_URL = "https://www.paypal.com/checkoutnow"


class CheckoutState(str, Enum):
    """Where a checkout attempt currently is"""
    IDLE = "idle"
    CREATING_ORDER = "creating_order"
    ATTACHING_ITEMS = "attaching_items"
    RECORDING_ACTIVITY = "recording_activity"
    CLEARING_CART = "clearing_cart"
    SETTLING = "settling"
    DONE = "done"
    FAILED = "failed"


class CheckoutError(Exception):
    """Base exception for checkout failures"""
    code = "checkout_error"
    default_message = "An error occurred while processing your payment. Please try again."

    def __init__(self, message: Optional[str] = None, cause: Any = None):
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class IdentityMissing(CheckoutError):
    """No signed-in customer"""
    code = "identity_missing"
    default_message = "Please sign in to place an order."


class EmptyCart(CheckoutError):
    """Nothing to order"""
    code = "empty_cart"
    default_message = "Your cart is empty."


class OrderCreationFailed(CheckoutError):
    """The backend did not create the order; safe to retry from scratch"""
    code = "order_creation_failed"
    default_message = "Failed to create order."


class DownstreamStepFailed(CheckoutError):
    """A step after order creation failed; the order already exists"""
    code = "downstream_step_failed"

    def __init__(
        self,
        step: CheckoutState,
        order_id: str,
        cause: Any = None,
        message: Optional[str] = None,
    ):
        self.step = step
        self.order_id = order_id
        if message is None and isinstance(cause, BackendError):
            message = cause.message
        super().__init__(message, cause)


class PaymentProviderError(CheckoutError):
    """The payment widget reported a failure"""
    code = "payment_provider_error"
    default_message = PAYMENT_FAILED_MESSAGE


class CheckoutBusy(CheckoutError):
    """Another checkout attempt is still running"""
    code = "checkout_busy"
    default_message = "A checkout is already in progress."


@dataclass
class Notification:
    """Message shown to the customer"""
    level: str  # "success" or "error"
    message: str


@dataclass
class CheckoutOutcome:
    """Result of one checkout attempt"""
    success: bool
    state: CheckoutState
    order_id: Optional[str] = None
    error: Optional[CheckoutError] = None
    failed_step: Optional[CheckoutState] = None
    notifications: list[Notification] = field(default_factory=list)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None


class CheckoutObserver:
    """
    Receives UI-facing events from the orchestrator.

    The default implementation ignores everything; views override what
    they care about.
    """

    def set_loading(self, loading: bool) -> None:
        pass

    def dismiss(self) -> None:
        pass

    def notify(self, notification: Notification) -> None:
        pass


class CheckoutOrchestrator:
    """
    Drives one customer's checkout against the restaurant backend.

    Only one attempt runs at a time; a second invocation while one is in
    flight returns a CheckoutBusy outcome without touching the backend.
    """

    def __init__(
        self,
        client: RestaurantApiClient,
        cart_store: CartStore,
        identity: Callable[[], Optional[str]],
        observer: Optional[CheckoutObserver] = None,
        paypal_checkout_url: str = DEFAULT_PAYPAL_CHECKOUT_URL,
    ):
        self.client = client
        self.cart_store = cart_store
        self.identity = identity
        self.observer = observer or CheckoutObserver()
        self.paypal_checkout_url = paypal_checkout_url
        self.state = CheckoutState.IDLE
        self.history: list[CheckoutState] = []
        self.last_outcome: Optional[CheckoutOutcome] = None
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    # ==================== Triggers ====================

    async def place_order(
        self,
        items: Iterable[CartLineItem],
        payment_method: PaymentMethod,
        provider_reference: Optional[str] = None,
    ) -> CheckoutOutcome:
        """Run the full order-placement sequence for these items"""
        if self.busy:
            return self._busy()

        async with self._lock:
            self.observer.set_loading(True)
            try:
                outcome = await self._attempt(tuple(items), payment_method, provider_reference)
            finally:
                self.observer.set_loading(False)
            self.last_outcome = outcome
            return outcome

    async def on_payment_success(
        self,
        payment_method: PaymentMethod,
        items: Iterable[CartLineItem],
        provider_reference: Optional[str] = None,
    ) -> CheckoutOutcome:
        """Payment widget confirmed the payment"""
        return await self.place_order(items, payment_method, provider_reference)

    def on_payment_error(self, error: Any) -> CheckoutOutcome:
        """Payment widget reported a failure; nothing is sent to the backend"""
        if self.busy:
            return self._busy()
        return self._payment_failed(error)

    def _payment_failed(self, error: Any) -> CheckoutOutcome:
        self.observer.set_loading(False)

        detail = error.error if isinstance(error, ProviderFailure) else error
        if isinstance(detail, BackendError):
            detail = detail.diagnostic
        logger.error(f"Payment error: {detail}")

        notifications: list[Notification] = []
        self._notify(notifications, "error", PAYMENT_FAILED_MESSAGE)
        outcome = CheckoutOutcome(
            success=False,
            state=CheckoutState.FAILED,
            error=PaymentProviderError(cause=error),
            notifications=notifications,
        )
        self.last_outcome = outcome
        return outcome

    async def pay(
        self,
        provider: PaymentProvider,
        items: Iterable[CartLineItem],
        config: Optional[dict[str, Any]] = None,
    ) -> CheckoutOutcome:
        """Collect payment through a provider, then place the order"""
        if self.busy:
            return self._busy()

        items = tuple(items)

        async with self._lock:
            self.observer.set_loading(True)
            try:
                self.history = []
                precheck = self._check_preconditions(items)
                if precheck is not None:
                    outcome = self._fail(precheck, None, None, [])
                else:
                    amount = sum(item.line_total for item in items)
                    result = await provider.initiate(amount, config)
                    if result.ok:
                        outcome = await self._attempt(items, provider.method, result.reference)
                    else:
                        outcome = self._payment_failed(result)
            finally:
                self.observer.set_loading(False)
            self.last_outcome = outcome
            return outcome

    # ==================== Step sequence ====================

    def _check_preconditions(self, items: tuple[CartLineItem, ...]) -> Optional[CheckoutError]:
        if not self.identity():
            return IdentityMissing()
        if not items:
            return EmptyCart()
        return None

    async def _attempt(
        self,
        items: tuple[CartLineItem, ...],
        payment_method: PaymentMethod,
        provider_reference: Optional[str],
    ) -> CheckoutOutcome:
        self.history = []
        notifications: list[Notification] = []

        precheck = self._check_preconditions(items)
        if precheck is not None:
            logger.warning(f"Checkout rejected: {precheck.message}")
            return self._fail(precheck, None, None, notifications)

        request = CheckoutRequest(
            user_id=self.identity(),
            items=items,
            payment_method=payment_method,
        )
        user_id = request.user_id
        lines = request.order_lines()

        # Step 1: create order; the backend decides pending vs paid
        self._transition(CheckoutState.CREATING_ORDER)
        try:
            order_id = await self.client.create_order(user_id, lines, payment_method.value)
        except BackendError as e:
            self._log_failure(CheckoutState.CREATING_ORDER, e)
            return self._fail(
                OrderCreationFailed(e.message, cause=e),
                CheckoutState.CREATING_ORDER,
                None,
                notifications,
            )

        if not order_id:
            logger.error(f"Backend returned no order ID for user {user_id}")
            return self._fail(
                OrderCreationFailed(),
                CheckoutState.CREATING_ORDER,
                None,
                notifications,
            )

        logger.info(f"Order {order_id} created for user {user_id} via {payment_method.value}")

        try:
            self._transition(CheckoutState.ATTACHING_ITEMS)
            await self.client.create_order_items(
                user_id,
                [{"order_id": order_id, **line} for line in lines],
            )

            self._transition(CheckoutState.RECORDING_ACTIVITY)
            await self.client.record_activity(
                user_id,
                datetime.now(timezone.utc).isoformat(),
                order_id,
            )

            self._transition(CheckoutState.CLEARING_CART)
            await self.client.remove_from_cart(user_id, lines)

            if payment_method.settles_immediately:
                self._transition(CheckoutState.SETTLING)
                await self._settle(request, order_id, provider_reference)
            else:
                logger.info(
                    f"{payment_method.value}: order {order_id} created and left as pending. "
                    "Waiting for verification."
                )
        except BackendError as e:
            step = self.state
            self._log_failure(step, e)
            return self._fail(
                DownstreamStepFailed(step, order_id, cause=e),
                step,
                order_id,
                notifications,
            )

        self._transition(CheckoutState.DONE)
        self.observer.dismiss()
        self._notify(notifications, "success", SUCCESS_MESSAGE)
        self.cart_store.remove_items(request.items)

        return CheckoutOutcome(
            success=True,
            state=CheckoutState.DONE,
            order_id=order_id,
            notifications=notifications,
        )

    async def _settle(
        self,
        request: CheckoutRequest,
        order_id: str,
        provider_reference: Optional[str],
    ) -> None:
        """Mark the order paid and store the transaction and payment records"""
        amount = request.amount_minor_units
        method = request.payment_method.value

        await self.client.update_payment_status(order_id, "paid")

        await self.client.record_paypal_transaction({
            "amount": amount,
            "description": "Payment for Order",
            "remarks": "Payment for order",
            "transaction_id": provider_reference,
            "checkout_url": f"{self.paypal_checkout_url}?token={provider_reference}",
            "payment_method": method,
            "user_id": request.user_id,
            "order_quantity": request.order_quantity,
            "menu_img": request.lead_image,
        })

        await self.client.record_paypal_payment({
            "user_id": request.user_id,
            "amount_paid": amount,
            "payment_method": method,
            "payment_status": "completed",
            "transaction_id": provider_reference,
        })

        logger.info(f"Order {order_id} settled: {amount} minor units via {method}")

    # ==================== Helpers ====================

    def _transition(self, state: CheckoutState) -> None:
        logger.debug(f"Checkout state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _notify(self, notifications: list[Notification], level: str, message: str) -> None:
        notification = Notification(level=level, message=message)
        notifications.append(notification)
        self.observer.notify(notification)

    def _fail(
        self,
        error: CheckoutError,
        failed_step: Optional[CheckoutState],
        order_id: Optional[str],
        notifications: list[Notification],
    ) -> CheckoutOutcome:
        self._transition(CheckoutState.FAILED)
        self._notify(notifications, "error", error.message)
        return CheckoutOutcome(
            success=False,
            state=CheckoutState.FAILED,
            order_id=order_id,
            error=error,
            failed_step=failed_step,
            notifications=notifications,
        )

    def _log_failure(self, step: CheckoutState, error: BackendError) -> None:
        logger.error(f"Payment process failed at {step.value}: {error.diagnostic}")

    def _busy(self) -> CheckoutOutcome:
        logger.warning("Checkout already in progress; ignoring new attempt")
        return CheckoutOutcome(
            success=False,
            state=self.state,
            error=CheckoutBusy(),
        )
