"""
Cart Store

Per-customer cart held by the storefront. The current cart is a single
immutable snapshot; every write builds a new snapshot and swaps it in with
one assignment, so any reader (cart badge, order summary) sees either the
old cart or the new one and never a partial update.
"""

from dataclasses import dataclass
from typing import Iterable

from ..models import CartLineItem


@dataclass(frozen=True)
class CartSnapshot:
    """Point-in-time view of a cart"""
    version: int
    items: tuple[CartLineItem, ...] = ()

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def __len__(self) -> int:
        return len(self.items)


class CartStore:
    """Versioned single-writer cart cell"""

    def __init__(self, items: Iterable[CartLineItem] = ()):
        self._snapshot = CartSnapshot(version=0, items=tuple(items))

    def snapshot(self) -> CartSnapshot:
        """Current cart; safe to hold on to"""
        return self._snapshot

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return self._snapshot.items

    @property
    def version(self) -> int:
        return self._snapshot.version

    def replace_cart(self, items: Iterable[CartLineItem]) -> CartSnapshot:
        """Swap in a new cart"""
        self._snapshot = CartSnapshot(
            version=self._snapshot.version + 1,
            items=tuple(items),
        )
        return self._snapshot

    def add_item(self, item: CartLineItem) -> CartSnapshot:
        return self.replace_cart(self._snapshot.items + (item,))

    def remove_items(self, items: Iterable[CartLineItem]) -> CartSnapshot:
        """Drop every cart entry equal to one of ``items``, in any order"""
        removed = set(items)
        return self.replace_cart(
            item for item in self._snapshot.items if item not in removed
        )

    def clear(self) -> CartSnapshot:
        return self.replace_cart(())
