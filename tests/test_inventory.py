"""Tests for inventory management and the product form"""
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from menstyle.errors import (
    ERROR_CATEGORY_REQUIRED,
    ERROR_PRICE_NEGATIVE,
    ERROR_SIZES_REQUIRED,
    ERROR_STOCK_NEGATIVE,
    NotFoundError,
    ValidationError,
)
from menstyle.services.domains import InventoryService, stock_status
from menstyle.services.models import Product
from menstyle.services.repositories import ProductRepository

FORM = {
    "name": "Blazer Azul",
    "description": "Blazer de linho",
    "price": "499.90",
    "sizes": ["M", "G"],
    "stock": 3,
    "image_url": "https://cdn.test/blazer.jpg",
    "category": "Blazers",
}


@pytest.fixture
def inventory(gateway):
    return InventoryService(ProductRepository(gateway))


@pytest.mark.parametrize(
    "stock,status",
    [(0, "Esgotado"), (1, "Baixo"), (5, "Baixo"), (6, "OK")],
)
def test_stock_status(stock, status):
    assert stock_status(stock) == status


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stock_filter,expected",
    [("all", {"prod-a", "prod-b", "prod-c"}), ("low", {"prod-b"}), ("out", {"prod-c"}), ("available", {"prod-a"})],
)
async def test_list_inventory_filters(inventory, stock_filter, expected):
    products = await inventory.list_inventory(stock_filter=stock_filter)

    assert {p.id for p in products} == expected


@pytest.mark.asyncio
async def test_update_stock(inventory, gateway):
    product = await inventory.update_stock("prod-a", 4)

    assert product.stock == 4
    assert gateway.row("products", "prod-a")["stock"] == 4


@pytest.mark.asyncio
async def test_negative_stock_rejected(inventory, gateway):
    with pytest.raises(ValidationError) as exc_info:
        await inventory.update_stock("prod-a", -1)

    assert exc_info.value.fields == {"stock": ERROR_STOCK_NEGATIVE}
    assert gateway.writes() == []


@pytest.mark.asyncio
async def test_update_stock_unknown_product(inventory):
    with pytest.raises(NotFoundError):
        await inventory.update_stock("missing", 1)


@pytest.mark.asyncio
async def test_toggle_availability(inventory, sample_products):
    out = Product(**sample_products[2])
    available = Product(**sample_products[0])

    assert (await inventory.toggle_availability(out)).stock == 1
    assert (await inventory.toggle_availability(available)).stock == 0


@pytest.mark.asyncio
async def test_delete_product(inventory, gateway):
    await inventory.delete_product("prod-c")

    assert {r["id"] for r in gateway.tables["products"]} == {"prod-a", "prod-b"}


@pytest.mark.asyncio
async def test_save_product_creates(inventory, gateway):
    product = await inventory.save_product(FORM)

    assert product.price == Decimal("499.9")
    stored = gateway.row("products", product.id)
    assert stored["price"] == 499.9
    assert stored["sizes"] == ["M", "G"]


@pytest.mark.asyncio
async def test_save_product_updates(inventory, gateway):
    product = await inventory.save_product({**FORM, "name": "Camisa Nova"}, product_id="prod-a")

    assert product.id == "prod-a"
    assert gateway.row("products", "prod-a")["name"] == "Camisa Nova"


@pytest.mark.asyncio
async def test_save_product_validation(inventory, gateway):
    bad = {**FORM, "price": "-1", "stock": -2, "sizes": [], "category": ""}

    with pytest.raises(ValidationError) as exc_info:
        await inventory.save_product(bad)

    assert exc_info.value.fields == {
        "price": ERROR_PRICE_NEGATIVE,
        "stock": ERROR_STOCK_NEGATIVE,
        "sizes": ERROR_SIZES_REQUIRED,
        "category": ERROR_CATEGORY_REQUIRED,
    }
    assert gateway.writes() == []


@pytest.mark.asyncio
async def test_upload_image_delegates_to_storage(gateway):
    storage = Mock()
    storage.upload = AsyncMock(return_value="https://cdn.test/1.jpg")
    inventory = InventoryService(ProductRepository(gateway), storage)

    url = await inventory.upload_image("foto.JPG", b"data", "image/jpeg")

    assert url == "https://cdn.test/1.jpg"
    storage.upload.assert_awaited_once_with("foto.JPG", b"data", "image/jpeg")
