"""Admin dashboard, budget and order list."""
from typing import Optional

from fastapi import APIRouter, Depends

from menstyle.auth.dependencies import get_admin_database
from menstyle.services.database import Database
from menstyle.services.money import to_float
from ..deps import serialize_order, serialize_product

router = APIRouter(tags=["admin-analytics"])


@router.get("/dashboard")
async def admin_dashboard(db: Database = Depends(get_admin_database)):
    stats = await db.reports.dashboard()
    return {
        "total_products": stats.total_products,
        "total_orders": stats.total_orders,
        "total_revenue": to_float(stats.total_revenue),
        "low_stock_count": stats.low_stock_count,
    }


@router.get("/budget")
async def admin_budget(db: Database = Depends(get_admin_database)):
    stats = await db.reports.budget()
    return {
        "total_products": stats.total_products,
        "total_stock": stats.total_stock,
        "low_stock": stats.low_stock,
        "out_of_stock": stats.out_of_stock,
        "total_orders": stats.total_orders,
        "total_revenue": to_float(stats.total_revenue),
        "monthly_revenue": to_float(stats.monthly_revenue),
        "today_orders": stats.today_orders,
        "categories": [
            {
                "category": c.category,
                "products": c.products,
                "stock": c.stock,
                "units_sold": c.units_sold,
                "revenue": to_float(c.revenue),
            }
            for c in stats.categories
        ],
        "low_stock_products": [serialize_product(p) for p in stats.low_stock_products],
    }


@router.get("/orders")
async def admin_orders(
    search: Optional[str] = None,
    order_type: str = "all",
    db: Database = Depends(get_admin_database),
):
    """Orders newest first; ``order_type`` is all, local or online."""
    orders = await db.reports.orders_list(search=search, order_type=order_type)
    return {"orders": [serialize_order(o) for o in orders]}
