"""Order assembly: online checkout and in-store sales."""
from .serializer import (
    build_order_record,
    format_handoff_message,
    parse_handoff_message,
    build_handoff_url,
)
from .checkout import CheckoutAssembler, CheckoutForm, CheckoutResult
from .local_sale import (
    LocalSaleAssembler,
    LocalSaleCustomer,
    LocalSaleResult,
    ChangeResult,
    compute_change,
    categories_of,
)

__all__ = [
    "build_order_record",
    "format_handoff_message",
    "parse_handoff_message",
    "build_handoff_url",
    "CheckoutAssembler",
    "CheckoutForm",
    "CheckoutResult",
    "LocalSaleAssembler",
    "LocalSaleCustomer",
    "LocalSaleResult",
    "ChangeResult",
    "compute_change",
    "categories_of",
]
