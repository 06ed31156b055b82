"""
Admin API Pydantic Models

Shared models for all admin endpoints.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


# ==================== AUTH MODELS ====================

class LoginRequest(BaseModel):
    email: str
    password: str

# ==================== INVENTORY MODELS ====================

class UpdateStockRequest(BaseModel):
    stock: int

class ProductRequest(BaseModel):
    # Validated by the product form so every bad field is reported at once
    name: str = ""
    description: str = ""
    price: Optional[Decimal] = None
    sizes: List[str] = []
    stock: Optional[int] = None
    image_url: str = ""
    category: str = ""

# ==================== LOCAL SALE MODELS ====================

class LocalSaleLine(BaseModel):
    product_id: str
    size: str = ""
    quantity: int = Field(default=1, ge=1)

class LocalSaleCustomerRequest(BaseModel):
    name: str = ""
    phone: str = ""

class LocalSaleRequest(BaseModel):
    customer: LocalSaleCustomerRequest
    lines: List[LocalSaleLine] = []
    payment_method: Optional[str] = None

class ChangeRequest(BaseModel):
    total: Decimal
    tendered: Decimal
