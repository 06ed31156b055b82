"""
Point-of-sale ("venda local") order assembly.

The operator picks products and sizes for a customer at the counter. Lines
are capped by the stock figure loaded with the product; on submit the live
stock is read again, the order is saved with ``order_type="local"`` and the
stock of every product is decremented.

The decrement is read-then-write per product, with no locking: two registers
selling the same product at the same moment can oversell. A failure halfway
through the decrement leaves the order saved and some products not yet
decremented; ``StockDecrementError`` says which.
"""
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from menstyle.cart.models import LineItem
from menstyle.constants import (
    DEFAULT_PAYMENT_METHOD,
    LOCAL_SALE_ADDRESS,
    LOCAL_SALE_PHONE,
    OrderType,
)
from menstyle.errors import (
    ERROR_LOCAL_SALE_INCOMPLETE,
    ERROR_MAX_QUANTITY_AVAILABLE,
    ERROR_MAX_QUANTITY_REACHED,
    ERROR_SIZE_REQUIRED,
    CartLimitError,
    ExternalApiError,
    InsufficientStockError,
    StockDecrementError,
    ValidationError,
)
from menstyle.logging import get_logger, sanitize_id_for_logging
from menstyle.services.models import Product
from menstyle.services.money import round_money, subtract, to_decimal
from menstyle.services.repositories import OrderRepository, ProductRepository
from menstyle.utils.validators import validate_form
from .serializer import build_order_record

logger = get_logger(__name__)


class LocalSaleCustomer(BaseModel):
    """Customer details at the counter; only the name is required."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    phone: str = ""


@dataclass
class ChangeResult:
    """Cash payment display: at most one of the two is non-zero."""
    change: Decimal
    shortfall: Decimal


@dataclass
class LocalSaleResult:
    order_id: str
    customer_name: str
    total: Decimal
    payment_method: str


def compute_change(total: Any, tendered: Any) -> ChangeResult:
    """Change owed (or amount still missing) for a cash payment."""
    difference = round_money(subtract(tendered, total))
    if difference >= 0:
        return ChangeResult(change=difference, shortfall=Decimal("0.00"))
    return ChangeResult(change=Decimal("0.00"), shortfall=-difference)


def categories_of(products: List[Product]) -> List[str]:
    """Distinct non-empty categories, in first-seen order."""
    return list(OrderedDict.fromkeys(p.category for p in products if p.category))


class LocalSaleAssembler:
    """Register state for one in-store sale."""

    def __init__(self, products: ProductRepository, orders: OrderRepository):
        self.products = products
        self.orders = orders
        self.lines: List[LineItem] = []
        # Last known stock per product id
        self._stock: Dict[str, int] = {}

    async def available_products(self, category: Optional[str] = None) -> List[Product]:
        """Products with stock, alphabetical; remembers their stock as caps."""
        products = await self.products.list_in_stock()
        for product in products:
            self._stock[product.id] = product.stock
        if category:
            products = [p for p in products if p.category == category]
        return products

    @property
    def total(self) -> Decimal:
        return round_money(sum((line.subtotal for line in self.lines), Decimal("0")))

    def _quantity_of(self, product_id: str, exclude_index: Optional[int] = None) -> int:
        return sum(
            line.quantity
            for i, line in enumerate(self.lines)
            if line.product_id == product_id and i != exclude_index
        )

    def add_product(self, product: Product, size: str) -> LineItem:
        """
        Add one unit of ``product`` in ``size``.

        Raises:
            CartLimitError: no size chosen, or the product's stock is used up
        """
        if not size:
            raise CartLimitError(ERROR_SIZE_REQUIRED)

        self._stock[product.id] = product.stock
        if self._quantity_of(product.id) >= product.stock:
            raise CartLimitError(ERROR_MAX_QUANTITY_REACHED, maximum=product.stock)

        for line in self.lines:
            if line.product_id == product.id and line.size == size:
                line.quantity += 1
                return line

        line = LineItem(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            size=size,
            quantity=1,
            image_url=product.image_url,
        )
        self.lines.append(line)
        return line

    def update_quantity(self, index: int, quantity: int) -> None:
        """
        Set the quantity of line ``index``; zero or less removes the line.
        An index outside the lines is ignored, as in ``remove_product``.

        Raises:
            CartLimitError: quantity above what the cached stock allows,
                naming the maximum
        """
        if quantity <= 0:
            self.remove_product(index)
            return

        if not 0 <= index < len(self.lines):
            return
        line = self.lines[index]
        stock = self._stock.get(line.product_id, line.quantity)
        maximum = stock - self._quantity_of(line.product_id, exclude_index=index)
        if quantity > maximum:
            raise CartLimitError(
                ERROR_MAX_QUANTITY_AVAILABLE.format(maximum=maximum), maximum=maximum
            )
        line.quantity = quantity

    def remove_product(self, index: int) -> None:
        if 0 <= index < len(self.lines):
            del self.lines[index]

    def compute_change(self, tendered: Any) -> ChangeResult:
        return compute_change(self.total, tendered)

    def reset(self) -> None:
        self.lines = []

    async def _check_live_stock(self, requested: Dict[str, int], names: Dict[str, str]) -> None:
        for product_id, quantity in requested.items():
            available = await self.products.get_stock(product_id)
            if available is None or available < quantity:
                raise InsufficientStockError(
                    product_id=product_id,
                    product_name=names[product_id],
                    available=available or 0,
                    requested=quantity,
                )

    async def _decrement_stock(self, order_id: str, requested: Dict[str, int]) -> None:
        decremented: List[str] = []
        for product_id, quantity in requested.items():
            try:
                current = await self.products.get_stock(product_id)
                await self.products.set_stock(product_id, (current or 0) - quantity)
            except ExternalApiError as e:
                logger.error(
                    f"Stock decrement stopped at product {sanitize_id_for_logging(product_id)} "
                    f"for order {sanitize_id_for_logging(order_id)}",
                    exc_info=True,
                )
                raise StockDecrementError(order_id, decremented, e) from e
            decremented.append(product_id)

    async def submit(
        self,
        customer: LocalSaleCustomer | Mapping[str, Any],
        lines: Optional[List[LineItem]] = None,
        payment_method: Optional[str] = None,
    ) -> LocalSaleResult:
        """
        Record the sale.

        Steps, in order: check every product's live stock (nothing is written
        if one falls short), save the order, decrement stock per product.

        Raises:
            ValidationError: no customer name or no lines
            InsufficientStockError: live stock below the requested quantity
            ExternalApiError: the order could not be saved
            StockDecrementError: the order was saved, the decrement was not
                completed
        """
        lines = self.lines if lines is None else lines

        missing: Dict[str, str] = {}
        form: Optional[LocalSaleCustomer] = None
        try:
            form = validate_form(LocalSaleCustomer, customer, {"name": ERROR_LOCAL_SALE_INCOMPLETE})
        except ValidationError as e:
            missing.update(e.fields)
        if not lines:
            missing["products"] = ERROR_LOCAL_SALE_INCOMPLETE
        if missing:
            raise ValidationError(missing)

        # Stock is per product, so sizes of the same product add up
        requested: Dict[str, int] = {}
        names: Dict[str, str] = {}
        for line in lines:
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
            names.setdefault(line.product_id, line.name)

        await self._check_live_stock(requested, names)

        total = round_money(sum((line.subtotal for line in lines), Decimal("0")))
        method = payment_method or DEFAULT_PAYMENT_METHOD
        record = build_order_record(
            customer_name=form.name,
            customer_phone=form.phone or LOCAL_SALE_PHONE,
            customer_address=LOCAL_SALE_ADDRESS,
            lines=lines,
            total=total,
            order_type=OrderType.LOCAL.value,
            payment_method=method,
        )

        try:
            order = await self.orders.create(record)
        except ExternalApiError:
            logger.error("Error creating local sale order", exc_info=True)
            raise

        await self._decrement_stock(order.id, requested)

        logger.info(f"Local sale {sanitize_id_for_logging(order.id)} recorded")
        if lines is self.lines:
            self.reset()

        return LocalSaleResult(
            order_id=order.id,
            customer_name=form.name,
            total=to_decimal(total),
            payment_method=method,
        )
