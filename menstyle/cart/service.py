"""In-memory cart store."""
from decimal import Decimal
from typing import List, Optional

from menstyle.services.money import round_money
from .models import LineItem


class CartStore:
    """
    Holds the lines a customer intends to buy.

    Every input is accepted and normalized: adding an existing product+size
    merges quantities, and a quantity of zero or less removes the line.
    ``item_count`` and ``total`` are computed from the lines on every read,
    so they cannot drift from them.

    Stock is not checked here; callers that know the product's stock do it
    before calling ``add_item``.
    """

    def __init__(self, items: Optional[List[LineItem]] = None):
        self._items: List[LineItem] = []
        for item in items or []:
            self.add_item(item)

    @property
    def items(self) -> List[LineItem]:
        """Lines in insertion order (read-only view)."""
        return list(self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> Decimal:
        return round_money(sum((item.subtotal for item in self._items), Decimal("0")))

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, line_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.line_id == line_id), None)

    def add_item(self, item: LineItem) -> None:
        """Add a line, or add its quantity to the existing line with the same id."""
        if item.quantity <= 0:
            return

        existing = self.get(item.line_id)
        if existing:
            existing.quantity += item.quantity
        else:
            self._items.append(item.copy())

    def update_quantity(self, line_id: str, new_quantity: int) -> None:
        """Set a line's quantity; zero or less removes it. Unknown ids are ignored."""
        if new_quantity <= 0:
            self.remove_item(line_id)
            return

        existing = self.get(line_id)
        if existing:
            existing.quantity = int(new_quantity)

    def remove_item(self, line_id: str) -> None:
        self._items = [item for item in self._items if item.line_id != line_id]

    def clear_cart(self) -> None:
        self._items = []

    def snapshot(self) -> List[LineItem]:
        """Independent copies of the lines (later cart changes do not leak in)."""
        return [item.copy() for item in self._items]

    def to_dict(self) -> dict:
        return {
            "items": [
                {**item.to_dict(), "subtotal": float(item.subtotal)}
                for item in self._items
            ],
            "item_count": self.item_count,
            "total": float(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartStore":
        return cls([LineItem.from_dict(item) for item in data.get("items", [])])
