"""
Shared Dependencies for Routers

Cart handles, the admin guard and JSON shapes used by several routers.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from menstyle.cart import CartStore, get_or_create_cart
from menstyle.services.models import Order, Product
from menstyle.services.money import to_float

CART_TOKEN_HEADER = "X-Cart-Token"


@dataclass
class CartHandle:
    token: str
    cart: CartStore

    def to_dict(self) -> dict:
        return {"cart_token": self.token, **self.cart.to_dict()}


async def get_cart_handle(
    cart_token: Optional[str] = Header(None, alias=CART_TOKEN_HEADER),
) -> CartHandle:
    """Cart of the caller; a missing or unknown token starts a new cart."""
    token, cart = get_or_create_cart(cart_token)
    return CartHandle(token=token, cart=cart)


def serialize_product(product: Product) -> dict:
    data = product.model_dump(mode="json")
    data["price"] = to_float(product.price)
    return data


def serialize_order(order: Order) -> dict:
    data = order.model_dump(mode="json")
    data["total"] = to_float(order.total)
    data["order_type"] = order.order_type or "online"
    for line, raw in zip(order.products, data["products"]):
        raw["price"] = to_float(line.price)
    return data


__all__ = [
    "CART_TOKEN_HEADER",
    "CartHandle",
    "get_cart_handle",
    "serialize_product",
    "serialize_order",
]
