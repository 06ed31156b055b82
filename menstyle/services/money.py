"""
Money helpers for BRL amounts.

Prices and totals are Decimal from the moment they are read until they are
written back; float exists only in JSON payloads and Supabase rows.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

CENT = Decimal("0.01")
MONEY_PRECISION = CENT

CURRENCY_SYMBOL = "R$"


def to_decimal(value: Number) -> Decimal:
    """
    Coerce a price, total or form input to Decimal.

    None and unparseable input become 0. Floats go through ``str`` so that
    89.9 stays 89.9 instead of its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal(0)
    try:
        return Decimal(str(value) if isinstance(value, float) else value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal(0)


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents (half-up)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Number) -> str:
    """
    Format a value the way the storefront shows prices (pt-BR).

    >>> format_money(1234.5)
    'R$ 1.234,50'
    """
    rounded = round_money(value)
    sign = "-" if rounded < 0 else ""
    # 1,234.50 -> 1.234,50
    formatted = f"{abs(rounded):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {formatted}"


def parse_money(text: str) -> Decimal:
    """
    Parse a pt-BR formatted amount back to Decimal.

    Accepts "R$ 1.234,56", "1234,56" and "1234.56". Invalid input gives 0.
    """
    cleaned = text.replace(CURRENCY_SYMBOL, "").replace("\xa0", "").strip()
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    return round_money(to_decimal(cleaned))


def to_float(value: Number) -> float:
    """JSON value of an amount."""
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    return to_decimal(value) * to_decimal(factor)


def subtract(a: Number, b: Number) -> Decimal:
    return to_decimal(a) - to_decimal(b)
