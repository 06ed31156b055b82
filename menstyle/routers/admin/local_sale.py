"""
Admin Local Sale Router

The register screen keeps the lines on the client; each submit rebuilds them
server-side from the current products, so the stock caps apply again.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from menstyle.auth.dependencies import get_admin_database, verify_admin
from menstyle.constants import PaymentMethod
from menstyle.orders import categories_of, compute_change
from menstyle.services.database import Database
from menstyle.services.money import to_float
from ..deps import serialize_product
from .models import ChangeRequest, LocalSaleRequest

router = APIRouter(tags=["admin-local-sale"])


@router.get("/local-sale/products")
async def local_sale_products(
    category: Optional[str] = None, db: Database = Depends(get_admin_database)
):
    """Products with stock, alphabetical, plus their categories and payment methods."""
    sale = db.local_sale()
    products = await sale.available_products()
    shown = [p for p in products if p.category == category] if category else products
    return {
        "products": [serialize_product(p) for p in shown],
        "categories": categories_of(products),
        "payment_methods": [m.value for m in PaymentMethod],
    }


@router.post("/local-sale")
async def local_sale_submit(request: LocalSaleRequest, db: Database = Depends(get_admin_database)):
    sale = db.local_sale()

    for line in request.lines:
        product = await db.catalog.get_product(line.product_id)
        for _ in range(line.quantity):
            sale.add_product(product, line.size)

    result = await sale.submit(
        request.customer.model_dump(), payment_method=request.payment_method
    )
    return {
        "order_id": result.order_id,
        "customer_name": result.customer_name,
        "total": to_float(result.total),
        "payment_method": result.payment_method,
    }


@router.post("/local-sale/change")
async def local_sale_change(request: ChangeRequest, admin=Depends(verify_admin)):
    """Change for a cash payment; display only, nothing is stored."""
    result = compute_change(request.total, request.tendered)
    return {"change": to_float(result.change), "shortfall": to_float(result.shortfall)}
