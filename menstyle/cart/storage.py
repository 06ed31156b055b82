"""Per-session cart handles (in-memory, never persisted, expire after a day idle)."""
import secrets
import time
from collections import OrderedDict
from typing import Optional, Tuple

from menstyle.constants import CART_TTL_SECONDS
from .service import CartStore

# token -> (cart, last touched); least recently touched first
_carts: "OrderedDict[str, Tuple[CartStore, float]]" = OrderedDict()


def _now() -> float:
    return time.monotonic()


def _evict_expired(now: float) -> None:
    while _carts:
        token, (_, touched) = next(iter(_carts.items()))
        if now - touched < CART_TTL_SECONDS:
            break
        del _carts[token]


def create_cart() -> Tuple[str, CartStore]:
    """Create an empty cart and return its token and handle."""
    now = _now()
    _evict_expired(now)
    token = secrets.token_urlsafe(24)
    cart = CartStore()
    _carts[token] = (cart, now)
    return token, cart


def get_cart(token: Optional[str]) -> Optional[CartStore]:
    """Cart of ``token``, refreshing its expiry; None when unknown or expired."""
    if not token:
        return None
    now = _now()
    _evict_expired(now)
    entry = _carts.get(token)
    if entry is None:
        return None
    if now - entry[1] >= CART_TTL_SECONDS:
        del _carts[token]
        return None
    _carts[token] = (entry[0], now)
    _carts.move_to_end(token)
    return entry[0]


def get_or_create_cart(token: Optional[str]) -> Tuple[str, CartStore]:
    """Resolve a cart token; unknown or missing tokens get a fresh cart."""
    cart = get_cart(token)
    if cart is not None:
        return token, cart
    return create_cart()


def discard_cart(token: str) -> None:
    _carts.pop(token, None)
