"""Order storage for the mock restaurant backend"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.order import Order, OrderLine, OrderItem, PaymentStatus, ActivityRecord


class OrderDatabase:
    """In-memory order and activity storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}
        self.activity: list[ActivityRecord] = []

    def create_order(
        self,
        user_id: str,
        lines: list[OrderLine],
        payment_method: str,
    ) -> Order:
        """Create a pending order"""
        now = datetime.utcnow()
        order = Order(
            order_id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            user_id=user_id,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING,
            lines=lines,
            total=sum(line.quantity * line.price for line in lines),
            created_at=now,
            updated_at=now,
        )
        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def add_items(self, items: list[OrderItem]) -> list[OrderItem]:
        """Attach items to their orders; returns the items whose order is unknown"""
        missing = []
        for item in items:
            order = self.get_order(item.order_id)
            if not order:
                missing.append(item)
                continue
            order.items.append(item)
            order.updated_at = datetime.utcnow()
        return missing

    def update_payment_status(
        self,
        order_id: str,
        status: PaymentStatus,
    ) -> Optional[Order]:
        """Update order payment status"""
        order = self.get_order(order_id)
        if not order:
            return None

        order.payment_status = status
        order.updated_at = datetime.utcnow()
        return order

    def record_activity(self, record: ActivityRecord) -> ActivityRecord:
        self.activity.append(record)
        return record

    def list_orders(self, user_id: Optional[str] = None, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = [
            o for o in self.orders.values()
            if user_id is None or o.user_id == user_id
        ]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]

    def reset(self) -> None:
        self.orders.clear()
        self.activity.clear()


# Singleton instance
order_db = OrderDatabase()
