"""Admin Repository - admin_users lookups."""
from typing import Optional

from menstyle.constants import ADMIN_USERS_TABLE
from menstyle.services.models import AdminUser
from .base import BaseRepository


class AdminRepository(BaseRepository):
    """admin_users table: a row per auth user with back-office access."""

    table = ADMIN_USERS_TABLE

    async def get_by_id(self, user_id: str) -> Optional[AdminUser]:
        row = await self.gateway.get(self.table, user_id, columns="id")
        return AdminUser(**row) if row else None
