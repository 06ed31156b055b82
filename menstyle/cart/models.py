"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from menstyle.services.money import to_decimal, round_money, multiply


def make_line_id(product_id: str, size: str) -> str:
    """Composite key: one line per product+size."""
    return f"{product_id}-{size}"


@dataclass
class LineItem:
    """One product+size entry in the cart."""
    product_id: str
    name: str
    unit_price: Decimal
    size: str
    quantity: int = 1
    image_url: Optional[str] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        self.quantity = int(self.quantity)

    @property
    def line_id(self) -> str:
        return make_line_id(self.product_id, self.size)

    @property
    def subtotal(self) -> Decimal:
        return round_money(multiply(self.unit_price, self.quantity))

    def copy(self) -> "LineItem":
        return replace(self)

    def to_dict(self) -> dict:
        """Shape stored in ``orders.products``."""
        return {
            "id": self.line_id,
            "product_id": self.product_id,
            "name": self.name,
            "price": float(self.unit_price),
            "size": self.size,
            "quantity": self.quantity,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a stored line.

        Local-sale lines written before ``product_id`` existed carry the
        product id in ``id``.
        """
        return cls(
            product_id=data.get("product_id") or data["id"],
            name=data["name"],
            unit_price=to_decimal(data.get("price", data.get("unit_price"))),
            size=data.get("size", ""),
            quantity=int(data.get("quantity", 1)),
            image_url=data.get("image_url"),
        )
