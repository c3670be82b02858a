"""Persisted cart storage for the mock restaurant backend"""

from ..models.order import OrderLine


def _line_key(line: OrderLine) -> tuple:
    return (line.item_name, line.size, line.categories_name, line.price, line.quantity)


class CartDatabase:
    """In-memory cart storage keyed by user"""

    def __init__(self):
        self.carts: dict[str, list[OrderLine]] = {}

    def get_cart(self, user_id: str) -> list[OrderLine]:
        """Get a user's cart (empty if none)"""
        return list(self.carts.get(user_id, []))

    def add_items(self, user_id: str, items: list[OrderLine]) -> list[OrderLine]:
        """Add items to a user's cart"""
        cart = self.carts.setdefault(user_id, [])
        cart.extend(items)
        return list(cart)

    def remove_items(self, user_id: str, items: list[OrderLine]) -> list[OrderLine]:
        """Remove exactly these items from a user's cart"""
        removed = {_line_key(item) for item in items}
        cart = [line for line in self.carts.get(user_id, []) if _line_key(line) not in removed]
        self.carts[user_id] = cart
        return list(cart)

    def reset(self) -> None:
        self.carts.clear()


# Singleton instance
cart_db = CartDatabase()
