"""Domain services wrapping the repositories."""
from .catalog import CatalogService
from .inventory import InventoryService, ProductForm, stock_status
from .reports import (
    BudgetStats,
    CategoryStats,
    DashboardStats,
    ReportsService,
    budget_stats,
    category_stats,
    dashboard_stats,
    filter_orders,
    low_stock_products,
)

__all__ = [
    "CatalogService",
    "InventoryService",
    "ProductForm",
    "stock_status",
    "ReportsService",
    "DashboardStats",
    "BudgetStats",
    "CategoryStats",
    "dashboard_stats",
    "budget_stats",
    "category_stats",
    "low_stock_products",
    "filter_orders",
]
