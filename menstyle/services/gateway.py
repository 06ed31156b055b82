"""
Data Gateway

Every read and write the store makes goes through ``DataGateway``: plain
select/get/insert/update/delete on named tables. ``SupabaseGateway`` is the
only production backend; tests plug in an in-memory one.

Usage:
    gateway = SupabaseGateway(await get_supabase())
    rows = await gateway.select("products", Query(gt={"stock": 0}, order_by="name", descending=False))
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase._async.client import AsyncClient

from menstyle.errors import ExternalApiError
from menstyle.logging import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]


@dataclass
class Query:
    """Filters for ``DataGateway.select``.

    - eq: column == value
    - contains: array column contains all of the values
    - gt: column > value
    - search: case-insensitive substring over ``search_columns`` (OR)
    """
    columns: str = "*"
    eq: dict[str, Any] = field(default_factory=dict)
    contains: dict[str, list] = field(default_factory=dict)
    gt: dict[str, Any] = field(default_factory=dict)
    search: Optional[str] = None
    search_columns: tuple[str, ...] = ("name", "description")
    order_by: Optional[str] = "created_at"
    descending: bool = True
    limit: Optional[int] = None


class DataGateway(ABC):
    """Row-level access to named collections."""

    @abstractmethod
    async def select(self, table: str, query: Optional[Query] = None) -> list[Row]:
        """Rows matching ``query`` (all rows, newest first, when omitted)."""

    @abstractmethod
    async def get(self, table: str, row_id: str, columns: str = "*") -> Optional[Row]:
        """Single row by id, or None."""

    @abstractmethod
    async def insert(self, table: str, row: Row) -> Row:
        """Insert a row and return it as stored (with id and created_at)."""

    @abstractmethod
    async def update(self, table: str, row_id: str, data: Row) -> Optional[Row]:
        """Update a row by id; None when no row matched."""

    @abstractmethod
    async def delete(self, table: str, row_id: str) -> None:
        """Delete a row by id (no error if it does not exist)."""


def _clean_search_term(term: str) -> str:
    """Strip characters that break PostgREST ``or`` filter syntax."""
    for char in ",()":
        term = term.replace(char, " ")
    return term.strip()


class SupabaseGateway(DataGateway):
    """``DataGateway`` over the async supabase-py client."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def _execute(self, builder, action: str, table: str):
        try:
            return await builder.execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Supabase {action} on '{table}' failed: {e}", exc_info=True)
            raise ExternalApiError(f"Falha ao acessar '{table}': {e}") from e

    async def select(self, table: str, query: Optional[Query] = None) -> list[Row]:
        query = query or Query()
        builder = self.client.table(table).select(query.columns)

        for column, value in query.eq.items():
            builder = builder.eq(column, value)
        for column, values in query.contains.items():
            builder = builder.contains(column, values)
        for column, value in query.gt.items():
            builder = builder.gt(column, value)

        if query.search:
            term = _clean_search_term(query.search)
            if term:
                builder = builder.or_(
                    ",".join(f"{column}.ilike.%{term}%" for column in query.search_columns)
                )

        if query.order_by:
            builder = builder.order(query.order_by, desc=query.descending)
        if query.limit:
            builder = builder.limit(query.limit)

        result = await self._execute(builder, "select", table)
        return result.data or []

    async def get(self, table: str, row_id: str, columns: str = "*") -> Optional[Row]:
        builder = self.client.table(table).select(columns).eq("id", row_id).limit(1)
        result = await self._execute(builder, "get", table)
        return result.data[0] if result.data else None

    async def insert(self, table: str, row: Row) -> Row:
        builder = self.client.table(table).insert(row)
        result = await self._execute(builder, "insert", table)
        if not result.data:
            raise ExternalApiError(f"Insert on '{table}' returned no row")
        return result.data[0]

    async def update(self, table: str, row_id: str, data: Row) -> Optional[Row]:
        builder = self.client.table(table).update(data).eq("id", row_id)
        result = await self._execute(builder, "update", table)
        return result.data[0] if result.data else None

    async def delete(self, table: str, row_id: str) -> None:
        builder = self.client.table(table).delete().eq("id", row_id)
        await self._execute(builder, "delete", table)
