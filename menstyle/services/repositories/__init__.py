"""
Repository Pattern for Database Operations

- ProductRepository: catalog, stock reads and writes
- OrderRepository: order records
- AdminRepository: admin_users lookups
"""
from .product_repo import ProductRepository
from .order_repo import OrderRepository
from .admin_repo import AdminRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
    "AdminRepository",
]
