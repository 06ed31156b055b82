"""
Admin Products & Inventory Router

Product editor, image upload and stock edits.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from menstyle.auth.dependencies import get_admin_database
from menstyle.constants import StockFilter
from menstyle.services.database import Database
from menstyle.services.domains import stock_status
from ..deps import serialize_product
from .models import ProductRequest, UpdateStockRequest

router = APIRouter(tags=["admin-products"])


def _inventory_entry(product) -> dict:
    return {**serialize_product(product), "status": stock_status(product.stock)}


# ==================== INVENTORY ====================

@router.get("/inventory")
async def admin_inventory(
    search: Optional[str] = None,
    category: Optional[str] = None,
    stock_filter: StockFilter = StockFilter.ALL,
    db: Database = Depends(get_admin_database),
):
    products = await db.inventory.list_inventory(
        search=search, category=category, stock_filter=stock_filter.value
    )
    return {"products": [_inventory_entry(p) for p in products]}


@router.patch("/inventory/{product_id}/stock")
async def admin_update_stock(
    product_id: str, request: UpdateStockRequest, db: Database = Depends(get_admin_database)
):
    product = await db.inventory.update_stock(product_id, request.stock)
    return _inventory_entry(product)


@router.post("/inventory/{product_id}/toggle")
async def admin_toggle_availability(product_id: str, db: Database = Depends(get_admin_database)):
    """Out of stock becomes 1 unit, anything else becomes out of stock."""
    product = await db.catalog.get_product(product_id)
    product = await db.inventory.toggle_availability(product)
    return _inventory_entry(product)


@router.delete("/inventory/{product_id}")
async def admin_delete_product(product_id: str, db: Database = Depends(get_admin_database)):
    await db.inventory.delete_product(product_id)
    return {"success": True}


# ==================== PRODUCTS ====================

@router.post("/products")
async def admin_create_product(
    request: ProductRequest, db: Database = Depends(get_admin_database)
):
    product = await db.inventory.save_product(request.model_dump())
    return {"success": True, "product": serialize_product(product)}


@router.put("/products/{product_id}")
async def admin_update_product(
    product_id: str, request: ProductRequest, db: Database = Depends(get_admin_database)
):
    product = await db.inventory.save_product(request.model_dump(), product_id=product_id)
    return {"success": True, "product": serialize_product(product)}


@router.post("/products/image")
async def admin_upload_image(
    file: UploadFile = File(...), db: Database = Depends(get_admin_database)
):
    """Store a product photo; the returned URL goes into ``image_url``."""
    content = await file.read()
    url = await db.inventory.upload_image(file.filename or "", content, file.content_type)
    return {"image_url": url}
