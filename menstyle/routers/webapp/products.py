"""Storefront catalog endpoints."""
from typing import Optional

from fastapi import APIRouter

from menstyle.constants import CATEGORIES, SIZES
from menstyle.services.database import get_database
from ..deps import serialize_product

router = APIRouter(tags=["webapp-products"])


@router.get("/products")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    size: Optional[str] = None,
):
    """Product grid, with the filters of the products page."""
    db = get_database()
    products = await db.catalog.list_products(category=category, search=search, size=size)
    return {
        "products": [serialize_product(p) for p in products],
        "categories": list(CATEGORIES),
        "sizes": list(SIZES),
    }


@router.get("/products/featured")
async def featured_products():
    db = get_database()
    products = await db.catalog.featured_products()
    return {"products": [serialize_product(p) for p in products]}


@router.get("/products/{product_id}")
async def get_product(product_id: str):
    db = get_database()
    product = await db.catalog.get_product(product_id)
    return serialize_product(product)
