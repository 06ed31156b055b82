"""
Admin API Router

Back-office endpoints under /api/admin. Everything except login requires an
admin bearer token.
"""
from fastapi import APIRouter

from .analytics import router as analytics_router
from .auth import router as auth_router
from .local_sale import router as local_sale_router
from .products import router as products_router

router = APIRouter(prefix="/api/admin", tags=["admin"])

router.include_router(auth_router)
router.include_router(analytics_router)
router.include_router(products_router)
router.include_router(local_sale_router)

__all__ = ["router"]
