"""Storefront catalog: listing, product detail and the add-to-cart guard."""
from typing import List, Optional

from menstyle.cart import CartStore, LineItem
from menstyle.constants import FEATURED_PRODUCTS_LIMIT
from menstyle.errors import (
    ERROR_MAX_QUANTITY_AVAILABLE,
    ERROR_OUT_OF_STOCK,
    ERROR_SIZE_REQUIRED,
    CartLimitError,
    NotFoundError,
)
from menstyle.services.models import Product
from menstyle.services.repositories import ProductRepository


class CatalogService:
    """Product browsing for customers."""

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    async def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        size: Optional[str] = None,
    ) -> List[Product]:
        return await self.repo.list(category=category, search=search, size=size)

    async def featured_products(self, limit: int = FEATURED_PRODUCTS_LIMIT) -> List[Product]:
        """Newest products for the home page."""
        return await self.repo.list(limit=limit)

    async def get_product(self, product_id: str) -> Product:
        product = await self.repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError()
        return product

    @staticmethod
    def add_to_cart(cart: CartStore, product: Product, size: str, quantity: int = 1) -> LineItem:
        """
        Add ``quantity`` units of ``product`` in ``size`` from the product page.

        All lines of the product together may not exceed its stock; the cart
        is left unchanged when the request is refused.

        Raises:
            CartLimitError: no size, a size the product is not offered in,
                out of stock, or more than the stock allows
        """
        if not size or size not in product.sizes:
            raise CartLimitError(ERROR_SIZE_REQUIRED)
        if not product.in_stock:
            raise CartLimitError(ERROR_OUT_OF_STOCK, maximum=0)

        item = LineItem(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            size=size,
            quantity=max(int(quantity), 1),
            image_url=product.image_url,
        )
        # Stock is per product: every size already in the cart counts
        in_cart = sum(line.quantity for line in cart.items if line.product_id == product.id)
        if in_cart + item.quantity > product.stock:
            maximum = product.stock - in_cart
            raise CartLimitError(
                ERROR_MAX_QUANTITY_AVAILABLE.format(maximum=maximum), maximum=maximum
            )

        cart.add_item(item)
        return cart.get(item.line_id)
