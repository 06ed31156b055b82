"""
Dashboard and budget figures.

All figures are computed in memory from the product and order lists, so the
functions here are pure; ``ReportsService`` only loads the lists.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from menstyle.constants import LOW_STOCK_THRESHOLD, OrderType
from menstyle.services.models import Order, Product
from menstyle.services.money import round_money
from menstyle.services.repositories import OrderRepository, ProductRepository

ZERO = Decimal("0.00")

@dataclass
class DashboardStats:
    total_products: int
    total_orders: int
    total_revenue: Decimal
    low_stock_count: int

@dataclass
class CategoryStats:
    category: str
    products: int = 0
    stock: int = 0
    units_sold: int = 0
    revenue: Decimal = ZERO

@dataclass
class BudgetStats:
    total_products: int
    total_stock: int
    low_stock: int
    out_of_stock: int
    total_orders: int
    total_revenue: Decimal
    monthly_revenue: Decimal
    today_orders: int
    categories: List[CategoryStats] = field(default_factory=list)
    low_stock_products: List[Product] = field(default_factory=list)

def _revenue(orders: Iterable[Order]) -> Decimal:
    return round_money(sum((o.total for o in orders), ZERO))

def _as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)

def dashboard_stats(products: List[Product], orders: List[Order]) -> DashboardStats:
    return DashboardStats(
        total_products=len(products),
        total_orders=len(orders),
        total_revenue=_revenue(orders),
        low_stock_count=sum(1 for p in products if p.stock <= LOW_STOCK_THRESHOLD),
    )

def low_stock_products(products: List[Product]) -> List[Product]:
    """Products at or below the threshold, lowest stock first."""
    return sorted(
        (p for p in products if p.stock <= LOW_STOCK_THRESHOLD),
        key=lambda p: p.stock,
    )

def category_stats(products: List[Product], orders: List[Order]) -> List[CategoryStats]:
    """
    Per-category product count, stock, units sold and revenue.

    Order lines are matched to the current products by id; lines whose
    product no longer exists are not counted.
    """
    stats: Dict[str, CategoryStats] = {}
    category_of: Dict[str, str] = {}

    for product in products:
        name = product.category or ""
        entry = stats.setdefault(name, CategoryStats(category=name))
        entry.products += 1
        entry.stock += product.stock
        category_of[product.id] = name

    for order in orders:
        for line in order.products:
            name = category_of.get(line.resolved_product_id)
            if name is None:
                continue
            entry = stats[name]
            entry.units_sold += line.quantity
            entry.revenue = round_money(entry.revenue + line.subtotal)

    return list(stats.values())

def budget_stats(
    products: List[Product],
    orders: List[Order],
    now: Optional[datetime] = None,
) -> BudgetStats:
    """Figures of the budget page; "month" and "today" are taken in UTC."""
    now = _as_utc(now or datetime.now(timezone.utc))

    this_month = []
    today = 0
    for order in orders:
        created = _as_utc(order.created_at)
        if created is None:
            continue
        if (created.year, created.month) == (now.year, now.month):
            this_month.append(order)
            if created.date() == now.date():
                today += 1

    return BudgetStats(
        total_products=len(products),
        total_stock=sum(p.stock for p in products),
        low_stock=sum(1 for p in products if 0 < p.stock <= LOW_STOCK_THRESHOLD),
        out_of_stock=sum(1 for p in products if p.stock == 0),
        total_orders=len(orders),
        total_revenue=_revenue(orders),
        monthly_revenue=_revenue(this_month),
        today_orders=today,
        categories=category_stats(products, orders),
        low_stock_products=low_stock_products(products),
    )

def filter_orders(
    orders: List[Order],
    search: Optional[str] = None,
    order_type: str = "all",
) -> List[Order]:
    """Order list filters: name (any case) or phone substring, and order type."""
    term = (search or "").strip()
    result = []
    for order in orders:
        if term and term.lower() not in order.customer_name.lower() and term not in order.customer_phone:
            continue
        if order_type == OrderType.LOCAL and not order.is_local:
            continue
        if order_type == OrderType.ONLINE and order.is_local:
            continue
        result.append(order)
    return result

class ReportsService:
    """Loads products and orders for the report pages."""

    def __init__(self, products: ProductRepository, orders: OrderRepository):
        self.products = products
        self.orders = orders

    async def dashboard(self) -> DashboardStats:
        return dashboard_stats(await self.products.list(), await self.orders.list_recent())

    async def budget(self, now: Optional[datetime] = None) -> BudgetStats:
        return budget_stats(await self.products.list(), await self.orders.list_recent(), now)

    async def orders_list(self, search: Optional[str] = None, order_type: str = "all") -> List[Order]:
        return filter_orders(await self.orders.list_recent(), search, order_type)
