"""Tests for the storefront catalog"""
from decimal import Decimal

import pytest

from menstyle.cart import CartStore
from menstyle.errors import CartLimitError, NotFoundError
from menstyle.services.domains import CatalogService
from menstyle.services.models import Product
from menstyle.services.repositories import ProductRepository


@pytest.fixture
def catalog(gateway):
    return CatalogService(ProductRepository(gateway))


@pytest.mark.asyncio
async def test_featured_products_limit(catalog):
    products = await catalog.featured_products(limit=2)

    assert [p.id for p in products] == ["prod-b", "prod-c"]


@pytest.mark.asyncio
async def test_list_products_combined_filters(catalog):
    products = await catalog.list_products(category="Camisas", size="M", search="slim")

    assert [p.id for p in products] == ["prod-a"]
    assert products[0].price == Decimal("100.0")


@pytest.mark.asyncio
async def test_get_product_not_found(catalog):
    with pytest.raises(NotFoundError):
        await catalog.get_product("missing")


class TestAddToCart:
    def test_adds_line(self, sample_product):
        cart = CartStore()
        product = Product(**sample_product)

        line = CatalogService.add_to_cart(cart, product, "M", 2)

        assert line.line_id == "prod-a-M"
        assert cart.total == Decimal("200.00")

    def test_size_required(self, sample_product):
        cart = CartStore()

        with pytest.raises(CartLimitError):
            CatalogService.add_to_cart(cart, Product(**sample_product), "", 1)
        with pytest.raises(CartLimitError):
            CatalogService.add_to_cart(cart, Product(**sample_product), "GG", 1)

        assert cart.is_empty

    def test_out_of_stock(self, sample_products):
        cart = CartStore()

        with pytest.raises(CartLimitError) as exc_info:
            CatalogService.add_to_cart(cart, Product(**sample_products[2]), "40", 1)

        assert exc_info.value.maximum == 0

    def test_stock_cap_includes_cart_quantity(self, sample_products):
        cart = CartStore()
        polo = Product(**sample_products[1])
        CatalogService.add_to_cart(cart, polo, "M", 1)

        with pytest.raises(CartLimitError) as exc_info:
            CatalogService.add_to_cart(cart, polo, "M", 2)

        assert exc_info.value.maximum == 1
        assert cart.item_count == 1

    def test_stock_cap_counts_every_size(self, sample_products):
        cart = CartStore()
        polo = Product(**sample_products[1])
        CatalogService.add_to_cart(cart, polo, "M", 2)

        with pytest.raises(CartLimitError) as exc_info:
            CatalogService.add_to_cart(cart, polo, "P", 2)

        assert exc_info.value.maximum == 0
        assert cart.item_count == 2
        assert len(cart.items) == 1

    def test_second_size_within_stock(self, sample_products):
        cart = CartStore()
        polo = Product(**sample_products[1])
        CatalogService.add_to_cart(cart, polo, "M", 1)

        CatalogService.add_to_cart(cart, polo, "P", 1)

        assert cart.item_count == 2
        assert len(cart.items) == 2
