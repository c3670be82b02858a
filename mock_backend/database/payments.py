"""Payment record storage for the mock restaurant backend"""

import uuid
from datetime import datetime

from ..models.payment import PayPalTransaction, PayPalPayment, StoredPayment


class PaymentDatabase:
    """In-memory transaction and payment storage"""

    def __init__(self):
        self.transactions: list[PayPalTransaction] = []
        self.payments: list[StoredPayment] = []

    def record_transaction(self, transaction: PayPalTransaction) -> PayPalTransaction:
        self.transactions.append(transaction)
        return transaction

    def record_payment(self, payment: PayPalPayment) -> StoredPayment:
        stored = StoredPayment(
            **payment.model_dump(),
            payment_id=f"PAY-{uuid.uuid4().hex[:8].upper()}",
            payment_date=datetime.utcnow(),
        )
        self.payments.append(stored)
        return stored

    def list_payments(self) -> list[StoredPayment]:
        return list(self.payments)

    def reset(self) -> None:
        self.transactions.clear()
        self.payments.clear()


# Singleton instance
payment_db = PaymentDatabase()
