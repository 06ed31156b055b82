"""
Store Database Service

One ``Database`` object owns the Supabase client, the data gateway, the
repositories and the domain services built on them.

Usage:
    from menstyle.services.database import get_database

    # At FastAPI startup (lifespan):
    await init_database()

    # In handlers:
    db = get_database()
    products = await db.catalog.list_products(category="Camisas")
"""

import asyncio
from typing import Optional

from supabase._async.client import AsyncClient

from menstyle.auth.session import AuthService
from menstyle.db import create_scoped_client, get_supabase
from menstyle.logging import get_logger
from menstyle.orders.checkout import CheckoutAssembler
from menstyle.orders.local_sale import LocalSaleAssembler
from menstyle.services.domains import CatalogService, InventoryService, ReportsService
from menstyle.services.gateway import DataGateway, SupabaseGateway
from menstyle.services.repositories import AdminRepository, OrderRepository, ProductRepository
from menstyle.services.storage import ImageStorage

logger = get_logger(__name__)


class Database:
    """
    Entry point to the store's data, auth and storage.

    ``gateway`` defaults to a ``SupabaseGateway`` over ``client``; tests pass
    an in-memory one.
    """

    def __init__(self, client: Optional[AsyncClient], gateway: Optional[DataGateway] = None):
        self.client = client
        self.gateway = gateway or SupabaseGateway(client)

        # Repositories
        self.products = ProductRepository(self.gateway)
        self.orders = OrderRepository(self.gateway)
        self.admins = AdminRepository(self.gateway)

        # Domains
        self.storage = ImageStorage(client) if client is not None else None
        self.auth = AuthService(client, self.admins) if client is not None else None
        self.catalog = CatalogService(self.products)
        self.inventory = InventoryService(self.products, self.storage)
        self.reports = ReportsService(self.products, self.orders)

    @classmethod
    async def create(cls) -> "Database":
        """Async factory: connects with ``SUPABASE_URL`` / ``SUPABASE_ANON_KEY``."""
        return cls(await get_supabase())

    async def for_user(self, access_token: str) -> "Database":
        """Database whose data and storage calls run as the holder of ``access_token``."""
        return Database(await create_scoped_client(access_token))

    def checkout(self, whatsapp_number: Optional[str] = None) -> CheckoutAssembler:
        return CheckoutAssembler(self.orders, whatsapp_number)

    def local_sale(self) -> LocalSaleAssembler:
        """Fresh point-of-sale state for one sale."""
        return LocalSaleAssembler(self.products, self.orders)


_db: Optional[Database] = None
_init_lock: Optional[asyncio.Lock] = None


async def init_database() -> Database:
    """Connect once and keep the Database for the life of the process."""
    global _db, _init_lock
    if _db is None:
        # Created lazily so it binds to the running loop
        _init_lock = _init_lock or asyncio.Lock()
        async with _init_lock:
            if _db is None:
                _db = await Database.create()
                logger.info("Store database ready")
    return _db


async def close_database() -> None:
    """Forget the Database (FastAPI shutdown)."""
    global _db
    if _db is not None:
        _db = None
        logger.info("Store database closed")


async def get_database_async() -> Database:
    """Database with lazy connection, for scripts that have no lifespan."""
    return _db or await init_database()


def get_database() -> Database:
    """The Database set up by ``init_database``; RuntimeError before that."""
    if _db is None:
        raise RuntimeError("Store database is not initialized; await init_database() first")
    return _db


def set_database(db: Optional[Database]) -> None:
    """Install (or clear) the Database; used by tests."""
    global _db
    _db = db


def is_database_initialized() -> bool:
    return _db is not None
