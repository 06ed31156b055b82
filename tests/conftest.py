"""Pytest configuration and fixtures"""
import itertools
import os
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_anon_key")
os.environ.setdefault("WHATSAPP_NUMBER", "5585994015283")

from menstyle.errors import ExternalApiError
from menstyle.services.database import Database, set_database
from menstyle.services.gateway import DataGateway, Query


class FakeGateway(DataGateway):
    """
    In-memory DataGateway.

    ``fail_on`` holds actions ("insert") or (action, table) pairs that raise
    ExternalApiError; ``fail_on_ids`` makes updates of those row ids fail.
    """

    def __init__(self, tables: Optional[dict] = None):
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.calls: list[tuple] = []
        self.fail_on: set = set()
        self.fail_on_ids: set = set()
        self._ids = itertools.count(1)

    def _check(self, action: str, table: str, row_id: Optional[str] = None):
        self.calls.append((action, table, row_id))
        if action in self.fail_on or (action, table) in self.fail_on:
            raise ExternalApiError(f"{action} on '{table}' failed")
        if row_id is not None and row_id in self.fail_on_ids:
            raise ExternalApiError(f"{action} of '{row_id}' failed")

    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("insert", "update", "delete")]

    async def select(self, table, query=None):
        self._check("select", table)
        query = query or Query()
        rows = [dict(r) for r in self.tables.get(table, [])]

        for column, value in query.eq.items():
            rows = [r for r in rows if r.get(column) == value]
        for column, values in query.contains.items():
            rows = [r for r in rows if all(v in (r.get(column) or []) for v in values)]
        for column, value in query.gt.items():
            rows = [r for r in rows if (r.get(column) or 0) > value]
        if query.search:
            term = query.search.lower()
            rows = [
                r for r in rows
                if any(term in str(r.get(c) or "").lower() for c in query.search_columns)
            ]
        if query.order_by:
            rows.sort(key=lambda r: str(r.get(query.order_by) or ""), reverse=query.descending)
        if query.limit:
            rows = rows[: query.limit]
        return rows

    async def get(self, table, row_id, columns="*"):
        self._check("get", table)
        for row in self.tables.get(table, []):
            if row.get("id") == row_id:
                return dict(row)
        return None

    async def insert(self, table, row):
        self._check("insert", table)
        stored = dict(row)
        stored.setdefault("id", f"{table}-{next(self._ids)}")
        stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    async def update(self, table, row_id, data):
        self._check("update", table, row_id)
        for row in self.tables.get(table, []):
            if row.get("id") == row_id:
                row.update(data)
                return dict(row)
        return None

    async def delete(self, table, row_id):
        self._check("delete", table, row_id)
        self.tables[table] = [r for r in self.tables.get(table, []) if r.get("id") != row_id]

    def row(self, table, row_id):
        return next(r for r in self.tables[table] if r["id"] == row_id)


def make_product(**overrides) -> dict:
    product = {
        "id": "prod-a",
        "name": "Camisa Social Slim",
        "description": "Camisa social de algodão",
        "price": 100.0,
        "sizes": ["P", "M", "G"],
        "stock": 10,
        "image_url": "https://cdn.test/camisa.jpg",
        "category": "Camisas",
        "created_at": "2025-01-01T10:00:00+00:00",
        "updated_at": None,
    }
    product.update(overrides)
    return product


@pytest.fixture
def sample_product():
    """Sample product data"""
    return make_product()


@pytest.fixture
def sample_products():
    """A small catalog covering stock levels and categories"""
    return [
        make_product(),
        make_product(
            id="prod-b", name="Polo Piquet", price=50.0, sizes=["P", "M"], stock=2,
            category="Polos", created_at="2025-01-03T10:00:00+00:00",
        ),
        make_product(
            id="prod-c", name="Calça Chino", price=150.0, sizes=["40", "42"], stock=0,
            category="Calças", description="Calça de sarja", created_at="2025-01-02T10:00:00+00:00",
        ),
    ]


@pytest.fixture
def sample_order():
    """Sample order data"""
    return {
        "id": "order-123",
        "customer_name": "João Silva",
        "customer_phone": "85999990000",
        "customer_address": "Rua A, 10",
        "products": [
            {
                "id": "prod-a-M",
                "product_id": "prod-a",
                "name": "Camisa Social Slim",
                "price": 100.0,
                "size": "M",
                "quantity": 2,
                "image_url": None,
            }
        ],
        "total": 200.0,
        "order_type": "online",
        "created_at": "2025-01-05T12:00:00+00:00",
    }


@pytest.fixture
def gateway(sample_products):
    return FakeGateway({"products": sample_products, "orders": [], "admin_users": []})


@pytest.fixture
def db(gateway):
    """Database over the in-memory gateway, installed as the singleton."""
    database = Database(None, gateway=gateway)
    database.auth = Mock()
    database.storage = Mock()
    database.for_user = AsyncMock(return_value=database)
    set_database(database)
    yield database
    set_database(None)


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client"""
    client = Mock()

    # Mock table operations
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.update.return_value = table_mock
    table_mock.delete.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.gt.return_value = table_mock
    table_mock.contains.return_value = table_mock
    table_mock.or_.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock

    # Auth
    client.auth = Mock()
    client.auth.get_session = AsyncMock(return_value=None)
    client.auth.get_user = AsyncMock(return_value=None)
    client.auth.sign_in_with_password = AsyncMock()
    client.auth.sign_out = AsyncMock()
    client.auth.admin.sign_out = AsyncMock()

    # Storage
    bucket = Mock()
    bucket.upload = AsyncMock()
    bucket.get_public_url = AsyncMock(return_value="https://cdn.test/public/products/1.jpg")
    client.storage.from_.return_value = bucket

    return client
