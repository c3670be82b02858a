"""Payment API routes for the mock restaurant backend"""

import logging
from fastapi import APIRouter

from ..models.payment import PayPalTransaction, PayPalPayment, StoredPayment
from ..database.payments import payment_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


@router.post("/paypal_transaction")
async def record_transaction(transaction: PayPalTransaction):
    """Store a PayPal transaction receipt"""
    payment_db.record_transaction(transaction)
    logger.info(
        f"PayPal transaction {transaction.transaction_id} for {transaction.user_id}: "
        f"{transaction.amount} minor units"
    )
    return {"message": "Transaction recorded", "transaction_id": transaction.transaction_id}


@router.post("/paypal_payment")
async def record_payment(payment: PayPalPayment):
    """Store a PayPal payment record"""
    stored = payment_db.record_payment(payment)
    return {"message": "Payment recorded", "payment_id": stored.payment_id}


@router.get("/get_payments", response_model=list[StoredPayment])
async def list_payments():
    """List all recorded payments"""
    return payment_db.list_payments()
