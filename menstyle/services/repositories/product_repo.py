"""Product Repository - Product catalog operations."""
from typing import Optional, List, Dict, Any

from menstyle.constants import PRODUCTS_TABLE
from menstyle.services.gateway import Query
from menstyle.services.models import Product
from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product database operations."""

    table = PRODUCTS_TABLE

    async def list(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        size: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        """Products matching the storefront filters, newest first."""
        query = Query(search=search or None, limit=limit)
        if category:
            query.eq["category"] = category
        if size:
            query.contains["sizes"] = [size]

        rows = await self.gateway.select(self.table, query)
        return [Product(**p) for p in rows]

    async def list_in_stock(self) -> List[Product]:
        """Products with stock left, alphabetical (register product picker)."""
        rows = await self.gateway.select(
            self.table, Query(gt={"stock": 0}, order_by="name", descending=False)
        )
        return [Product(**p) for p in rows]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        row = await self.gateway.get(self.table, product_id)
        return Product(**row) if row else None

    async def get_stock(self, product_id: str) -> Optional[int]:
        """Current stock figure, read fresh from the data API."""
        row = await self.gateway.get(self.table, product_id, columns="stock")
        if row is None:
            return None
        return int(row.get("stock") or 0)

    async def set_stock(self, product_id: str, stock: int) -> None:
        await self.gateway.update(self.table, product_id, {"stock": stock})

    async def create(self, data: Dict[str, Any]) -> Product:
        row = await self.gateway.insert(self.table, data)
        return Product(**row)

    async def update(self, product_id: str, data: Dict[str, Any]) -> Optional[Product]:
        row = await self.gateway.update(self.table, product_id, data)
        return Product(**row) if row else None

    async def delete(self, product_id: str) -> None:
        await self.gateway.delete(self.table, product_id)
