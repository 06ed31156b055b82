"""
Back-office inventory: stock edits and the product form.

Stock figures are written as given; there is no reservation or history.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from menstyle.constants import LOW_STOCK_THRESHOLD, StockFilter
from menstyle.errors import (
    ERROR_CATEGORY_REQUIRED,
    ERROR_DESCRIPTION_REQUIRED,
    ERROR_IMAGE_REQUIRED,
    ERROR_NAME_REQUIRED,
    ERROR_PRICE_NEGATIVE,
    ERROR_SIZES_REQUIRED,
    ERROR_STOCK_NEGATIVE,
    NotFoundError,
    ValidationError,
)
from menstyle.logging import get_logger, sanitize_id_for_logging
from menstyle.services.models import Product
from menstyle.services.money import round_money
from menstyle.services.repositories import ProductRepository
from menstyle.services.storage import ImageStorage
from menstyle.utils.validators import validate_form

logger = get_logger(__name__)

STATUS_OUT = "Esgotado"
STATUS_LOW = "Baixo"
STATUS_OK = "OK"

PRODUCT_MESSAGES = {
    "name": ERROR_NAME_REQUIRED,
    "description": ERROR_DESCRIPTION_REQUIRED,
    "price": ERROR_PRICE_NEGATIVE,
    "stock": ERROR_STOCK_NEGATIVE,
    "image_url": ERROR_IMAGE_REQUIRED,
    "category": ERROR_CATEGORY_REQUIRED,
    "sizes": ERROR_SIZES_REQUIRED,
}


class ProductForm(BaseModel):
    """Fields of the product editor."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    sizes: List[str] = Field(min_length=1)
    stock: int = Field(ge=0)
    image_url: str = Field(min_length=1)
    category: str = Field(min_length=1)

    def to_record(self) -> dict:
        data = self.model_dump()
        data["price"] = float(round_money(self.price))
        return data


def stock_status(stock: int) -> str:
    if stock <= 0:
        return STATUS_OUT
    if stock <= LOW_STOCK_THRESHOLD:
        return STATUS_LOW
    return STATUS_OK


def matches_stock_filter(stock: int, stock_filter: str) -> bool:
    if stock_filter == StockFilter.LOW:
        return 0 < stock <= LOW_STOCK_THRESHOLD
    if stock_filter == StockFilter.OUT:
        return stock == 0
    if stock_filter == StockFilter.AVAILABLE:
        return stock > LOW_STOCK_THRESHOLD
    return True


class InventoryService:
    """Product and stock management for the operator."""

    def __init__(self, repo: ProductRepository, storage: Optional[ImageStorage] = None):
        self.repo = repo
        self.storage = storage

    async def list_inventory(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        stock_filter: str = StockFilter.ALL.value,
    ) -> List[Product]:
        products = await self.repo.list(category=category, search=search)
        return [p for p in products if matches_stock_filter(p.stock, stock_filter)]

    @staticmethod
    def stock_status(stock: int) -> str:
        return stock_status(stock)

    async def update_stock(self, product_id: str, new_stock: int) -> Product:
        if new_stock < 0:
            raise ValidationError({"stock": ERROR_STOCK_NEGATIVE})

        product = await self.repo.update(product_id, {"stock": int(new_stock)})
        if product is None:
            raise NotFoundError()
        logger.info(f"Stock of {sanitize_id_for_logging(product_id)} set to {new_stock}")
        return product

    async def toggle_availability(self, product: Product) -> Product:
        """Out of stock becomes 1 unit; anything else becomes out of stock."""
        return await self.update_stock(product.id, 1 if product.stock == 0 else 0)

    async def delete_product(self, product_id: str) -> None:
        await self.repo.delete(product_id)
        logger.info(f"Product {sanitize_id_for_logging(product_id)} deleted")

    async def save_product(self, form, product_id: Optional[str] = None) -> Product:
        """
        Create a product, or update ``product_id`` when given.

        Raises:
            ValidationError: listing every invalid field, nothing written
            NotFoundError: ``product_id`` does not exist
        """
        data = validate_form(ProductForm, form, PRODUCT_MESSAGES).to_record()

        if product_id is None:
            product = await self.repo.create(data)
            logger.info(f"Product {sanitize_id_for_logging(product.id)} created")
            return product

        product = await self.repo.update(product_id, data)
        if product is None:
            raise NotFoundError()
        return product

    async def upload_image(
        self, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """Store a product image and return its public URL."""
        if self.storage is None:
            raise RuntimeError("Image storage is not configured")
        return await self.storage.upload(filename, content, content_type)
