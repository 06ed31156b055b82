"""Storefront request bodies."""
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    product_id: str
    size: str = ""
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    # Blank values are reported per field by the checkout validation
    name: str = ""
    phone: str = ""
    address: str = ""
