"""Order records and the WhatsApp hand-off message."""
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from menstyle.cart.models import LineItem
from menstyle.services.money import format_money, parse_money, round_money

HANDOFF_URL = "https://wa.me/{recipient}?text={text}"

_ITEM_RE = re.compile(r"^• (?P<name>.+) \((?P<size>[^()]*)\)$")
_QUANTITY_RE = re.compile(r"^\s+Quantidade: (?P<quantity>\d+)$")
_UNIT_PRICE_RE = re.compile(r"^\s+Preço unitário: (?P<price>.+)$")
_TOTAL_RE = re.compile(r"^💰 \*Total: (?P<total>.+)\*$")


def build_order_record(
    customer_name: str,
    customer_phone: str,
    customer_address: str,
    lines: List[LineItem],
    total: Decimal,
    order_type: str,
    payment_method: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the row inserted into ``orders``.

    ``products`` is built from copies of the lines, so the record does not
    change if the cart does afterwards.
    """
    record: Dict[str, Any] = {
        "customer_name": customer_name,
        "customer_phone": customer_phone,
        "customer_address": customer_address,
        "products": [line.copy().to_dict() for line in lines],
        "total": float(round_money(total)),
        "order_type": order_type,
    }
    if payment_method:
        record["payment_method"] = payment_method
    return record


def format_handoff_message(
    customer_name: str,
    customer_phone: str,
    customer_address: str,
    lines: List[LineItem],
    total: Decimal,
) -> str:
    """Plain-text order summary sent to the store through WhatsApp."""
    message = "🛒 *Novo Pedido - MenStyle*\n\n"
    message += f"👤 *Cliente:* {customer_name}\n"
    message += f"📱 *Telefone:* {customer_phone}\n"
    message += f"📍 *Endereço:* {customer_address}\n\n"
    message += "📦 *Produtos:*\n"

    for line in lines:
        message += f"• {line.name} ({line.size})\n"
        message += f"  Quantidade: {line.quantity}\n"
        message += f"  Preço unitário: {format_money(line.unit_price)}\n"
        message += f"  Subtotal: {format_money(line.subtotal)}\n\n"

    message += f"💰 *Total: {format_money(total)}*\n\n"
    message += "Obrigado pela preferência! 🙏"
    return message


def parse_handoff_message(message: str) -> Dict[str, Any]:
    """
    Read items and total back out of a hand-off message.

    Returns:
        {"items": [{"name", "size", "quantity", "unit_price"}], "total": Decimal}
    """
    items: List[Dict[str, Any]] = []
    total = Decimal("0")

    for raw_line in message.splitlines():
        if match := _ITEM_RE.match(raw_line):
            items.append({
                "name": match["name"],
                "size": match["size"],
                "quantity": 0,
                "unit_price": Decimal("0"),
            })
        elif (match := _QUANTITY_RE.match(raw_line)) and items:
            items[-1]["quantity"] = int(match["quantity"])
        elif (match := _UNIT_PRICE_RE.match(raw_line)) and items:
            items[-1]["unit_price"] = parse_money(match["price"])
        elif match := _TOTAL_RE.match(raw_line):
            total = parse_money(match["total"])

    return {"items": items, "total": total}


def build_handoff_url(message: str, recipient: str) -> str:
    """WhatsApp deep link with the message pre-filled."""
    return HANDOFF_URL.format(recipient=recipient, text=quote(message, safe=""))
