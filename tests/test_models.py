"""Tests for database models"""
from decimal import Decimal

from menstyle.services.models import Order, OrderLine, Product


def test_product_defaults(sample_product):
    product = Product(**{**sample_product, "sizes": None, "unknown_column": 1})

    assert product.sizes == []
    assert product.price == Decimal("100.0")
    assert product.in_stock


def test_order_from_row(sample_order):
    order = Order(**sample_order)

    assert order.total == Decimal("200.0")
    assert order.products[0].subtotal == Decimal("200.0")
    assert not order.is_local


def test_order_without_type_is_online(sample_order):
    order = Order(**{**sample_order, "order_type": None, "products": None})

    assert order.products == []
    assert not order.is_local


def test_legacy_line_resolves_product_from_id():
    line = OrderLine(id="prod-z", name="Blazer", price="300", quantity=1)

    assert line.resolved_product_id == "prod-z"
