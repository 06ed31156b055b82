"""Order Repository - Order operations."""
from typing import List, Optional, Dict, Any

from menstyle.constants import ORDERS_TABLE
from menstyle.services.gateway import Query
from menstyle.services.models import Order
from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations.

    Orders are written once and never edited from the store.
    """

    table = ORDERS_TABLE

    async def create(self, record: Dict[str, Any]) -> Order:
        row = await self.gateway.insert(self.table, record)
        return Order(**row)

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        row = await self.gateway.get(self.table, order_id)
        return Order(**row) if row else None

    async def list_recent(self, limit: Optional[int] = None) -> List[Order]:
        """All orders, newest first."""
        rows = await self.gateway.select(self.table, Query(limit=limit))
        return [Order(**o) for o in rows]
