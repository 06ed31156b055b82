"""
Online checkout.

Turns a cart plus the customer's delivery details into an ``orders`` row and
a WhatsApp hand-off message. The hand-off itself (opening the link) is left
to the client.
"""
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from menstyle.cart import CartStore
from menstyle.constants import DEFAULT_WHATSAPP_NUMBER, OrderType
from menstyle.errors import (
    ERROR_ADDRESS_REQUIRED,
    ERROR_EMPTY_CART,
    ERROR_NAME_REQUIRED,
    ERROR_PHONE_REQUIRED,
    ExternalApiError,
    ValidationError,
)
from menstyle.logging import get_logger, mask_phone_for_logging, sanitize_id_for_logging
from menstyle.services.repositories import OrderRepository
from menstyle.utils.validators import validate_form
from .serializer import build_handoff_url, build_order_record, format_handoff_message

logger = get_logger(__name__)

CHECKOUT_MESSAGES = {
    "name": ERROR_NAME_REQUIRED,
    "phone": ERROR_PHONE_REQUIRED,
    "address": ERROR_ADDRESS_REQUIRED,
}


class CheckoutForm(BaseModel):
    """Delivery details typed by the customer."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)


@dataclass
class CheckoutResult:
    order_id: str
    total: Decimal
    message: str
    handoff_url: str


FieldsT = CheckoutForm | Mapping[str, Any]


class CheckoutAssembler:
    """Validate, persist and summarize an online order."""

    def __init__(self, orders: OrderRepository, whatsapp_number: str | None = None):
        self.orders = orders
        self.whatsapp_number = whatsapp_number or os.environ.get(
            "WHATSAPP_NUMBER", DEFAULT_WHATSAPP_NUMBER
        )

    def validate(self, fields: FieldsT) -> CheckoutForm:
        """Raise ``ValidationError`` naming every missing field."""
        return validate_form(CheckoutForm, fields, CHECKOUT_MESSAGES)

    def build_order_record(self, fields: FieldsT, cart: CartStore) -> dict:
        form = self.validate(fields)
        return build_order_record(
            customer_name=form.name,
            customer_phone=form.phone,
            customer_address=form.address,
            lines=cart.snapshot(),
            total=cart.total,
            order_type=OrderType.ONLINE.value,
        )

    def format_handoff_message(self, fields: FieldsT, cart: CartStore) -> str:
        form = self.validate(fields)
        return format_handoff_message(
            form.name, form.phone, form.address, cart.snapshot(), cart.total
        )

    async def submit(self, fields: FieldsT, cart: CartStore) -> CheckoutResult:
        """
        Validate, save the order once, then clear the cart.

        Nothing is written while validation fails. If saving fails the cart
        is left as it was and ``ExternalApiError`` is raised; the caller
        decides whether to try again.
        """
        form = self.validate(fields)
        if cart.is_empty:
            raise ValidationError({"products": ERROR_EMPTY_CART})

        record = self.build_order_record(form, cart)
        message = self.format_handoff_message(form, cart)
        total = cart.total

        try:
            order = await self.orders.create(record)
        except ExternalApiError:
            logger.error("Error creating order", exc_info=True)
            raise

        cart.clear_cart()
        logger.info(
            f"Online order {sanitize_id_for_logging(order.id)} created "
            f"for {mask_phone_for_logging(form.phone)}"
        )

        return CheckoutResult(
            order_id=order.id,
            total=total,
            message=message,
            handoff_url=build_handoff_url(message, self.whatsapp_number),
        )
