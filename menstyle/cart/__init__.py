"""Cart package: line items, the in-memory store, and per-session handles."""
from .models import LineItem, make_line_id
from .service import CartStore
from .storage import create_cart, get_cart, get_or_create_cart, discard_cart

__all__ = [
    "LineItem",
    "make_line_id",
    "CartStore",
    "create_cart",
    "get_cart",
    "get_or_create_cart",
    "discard_cart",
]
