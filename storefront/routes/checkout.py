"""Checkout API routes for the storefront"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Depends

from payments.models import PaymentMethod
from payments.providers import PaymentProviderRegistry

from ..core.session import session_manager
from ..models import CartLineItem
from ..services.checkout import CheckoutOrchestrator, CheckoutOutcome, CheckoutBusy
from .dependencies import get_orchestrator, get_payment_registry, get_current_user_id

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


class PayRequest(BaseModel):
    """Pay for the current cart through a provider"""
    payment_method: PaymentMethod
    config: dict[str, Any] = Field(default_factory=dict)


class PaymentSuccessCallback(BaseModel):
    """Payment widget reported success"""
    payment_method: PaymentMethod
    provider_reference: Optional[str] = None


class PaymentErrorCallback(BaseModel):
    """Payment widget reported a failure"""
    error: Optional[str] = None


class NotificationModel(BaseModel):
    level: str
    message: str


class CheckoutResponse(BaseModel):
    """Response from a checkout trigger"""
    success: bool
    state: str
    order_id: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    failed_step: Optional[str] = None
    notifications: list[NotificationModel] = []


class OrderSummaryResponse(BaseModel):
    """What the customer is about to pay for"""
    items: list[CartLineItem]
    grand_total: float
    order_quantity: int
    payment_methods: list[PaymentMethod]


def _checkout_response(outcome: CheckoutOutcome) -> CheckoutResponse:
    if isinstance(outcome.error, CheckoutBusy):
        raise HTTPException(status_code=409, detail=outcome.error.message)

    return CheckoutResponse(
        success=outcome.success,
        state=outcome.state.value,
        order_id=outcome.order_id,
        error_code=outcome.error_code,
        error_message=outcome.error_message,
        failed_step=outcome.failed_step.value if outcome.failed_step else None,
        notifications=[
            NotificationModel(level=n.level, message=n.message)
            for n in outcome.notifications
        ],
    )


def _cart_items(user_id: Optional[str]) -> tuple[CartLineItem, ...]:
    if not user_id:
        return ()
    session = session_manager.get_or_create_session(user_id)
    items = session.cart.snapshot().items
    if not items:
        raise HTTPException(status_code=400, detail="Cart is empty")
    return items


@router.get("/summary", response_model=OrderSummaryResponse)
async def order_summary(
    user_id: Optional[str] = Depends(get_current_user_id),
    registry: PaymentProviderRegistry = Depends(get_payment_registry),
):
    """Order summary for the current cart"""
    if not user_id:
        raise HTTPException(status_code=401, detail="Sign in required")

    items = _cart_items(user_id)
    return OrderSummaryResponse(
        items=list(items),
        grand_total=sum(item.line_total for item in items),
        order_quantity=sum(item.quantity for item in items),
        payment_methods=registry.methods,
    )


@router.post("/pay", response_model=CheckoutResponse)
async def pay(
    request: PayRequest,
    user_id: Optional[str] = Depends(get_current_user_id),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
    registry: PaymentProviderRegistry = Depends(get_payment_registry),
):
    """
    Collect payment for the current cart and place the order.

    The provider confirms the payment first; the order is only created
    once it has.
    """
    provider = registry.get(request.payment_method)
    if provider is None:
        raise HTTPException(
            status_code=400,
            detail=f"Payment method {request.payment_method.value} is not available",
        )

    items = _cart_items(user_id)
    outcome = await orchestrator.pay(provider, items, request.config)
    return _checkout_response(outcome)


@router.post("/callback/success", response_model=CheckoutResponse)
async def payment_success(
    callback: PaymentSuccessCallback,
    user_id: Optional[str] = Depends(get_current_user_id),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
    registry: PaymentProviderRegistry = Depends(get_payment_registry),
):
    """
    Payment widget confirmed the payment in the browser.

    Immediately-settled methods are captured through their provider before
    the order is placed, so an unverified reference never marks an order paid.
    """
    items = _cart_items(user_id)

    if callback.payment_method.settles_immediately:
        provider = registry.get(callback.payment_method)
        if provider is None:
            raise HTTPException(
                status_code=400,
                detail=f"Payment method {callback.payment_method.value} is not available",
            )
        outcome = await orchestrator.pay(
            provider,
            items,
            {"approval_token": callback.provider_reference},
        )
        return _checkout_response(outcome)

    outcome = await orchestrator.on_payment_success(
        callback.payment_method,
        items,
        callback.provider_reference,
    )
    return _checkout_response(outcome)


@router.post("/callback/error", response_model=CheckoutResponse)
async def payment_error(
    callback: PaymentErrorCallback,
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
):
    """Payment widget reported a failure"""
    outcome = orchestrator.on_payment_error(callback.error)
    return _checkout_response(outcome)


@router.get("/status")
async def checkout_status(
    user_id: Optional[str] = Depends(get_current_user_id),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
):
    """Current checkout state for the caller"""
    if not user_id:
        raise HTTPException(status_code=401, detail="Sign in required")

    last = orchestrator.last_outcome
    return {
        "user_id": user_id,
        "state": orchestrator.state.value,
        "busy": orchestrator.busy,
        "history": [state.value for state in orchestrator.history],
        "last_order_id": last.order_id if last else None,
        "last_error": last.error_code if last else None,
    }
