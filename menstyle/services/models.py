"""Database Models - Pydantic models for all entities."""
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from menstyle.constants import OrderType
from menstyle.services.money import to_decimal as _to_decimal


class Product(BaseModel):
    """Product model."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields from DB

    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    sizes: list[str] = []
    stock: int = 0
    image_url: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("sizes", mode="before")
    @classmethod
    def default_sizes(cls, v):
        return v or []

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class OrderLine(BaseModel):
    """One product+size line as stored in ``orders.products``.

    Older local-sale rows stored the product id in ``id`` and have no
    ``product_id``; ``resolved_product_id`` covers both shapes.
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    product_id: Optional[str] = None
    name: str
    price: Decimal
    size: str = ""
    quantity: int = 1
    image_url: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def resolved_product_id(self) -> str:
        return self.product_id or self.id

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order(BaseModel):
    """Order model.

    ``order_type`` is missing on rows created before local sales existed;
    those are online orders.
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    customer_name: str
    customer_phone: str = ""
    customer_address: str = ""
    products: list[OrderLine] = []
    total: Decimal
    order_type: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("total", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("products", mode="before")
    @classmethod
    def default_products(cls, v):
        return v or []

    @property
    def is_local(self) -> bool:
        return self.order_type == OrderType.LOCAL.value


class AdminUser(BaseModel):
    """Row of ``admin_users``; its id is the auth user id."""
    model_config = ConfigDict(extra="ignore")

    id: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
