"""
MenStyle Store - Main FastAPI Application

Single entry point for the storefront and back-office JSON API.
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from menstyle.errors import (
    AuthenticationError,
    CartLimitError,
    ExternalApiError,
    InsufficientStockError,
    NotFoundError,
    StockDecrementError,
    ValidationError,
)
from menstyle.logging import get_logger
from menstyle.routers.admin import router as admin_router
from menstyle.routers.webapp import router as webapp_router
from menstyle.services.database import close_database, init_database

logger = get_logger(__name__)


def _allowed_origins() -> list[str]:
    raw = os.environ.get("ALLOWED_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    await init_database()
    yield
    await close_database()


app = FastAPI(
    title="MenStyle Store",
    description="Storefront and back-office API of the MenStyle clothing store",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Cart-Token"],
)

app.include_router(webapp_router)
app.include_router(admin_router)


# ==================== ERROR HANDLERS ====================

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message, "fields": exc.fields})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(CartLimitError)
async def cart_limit_handler(request: Request, exc: CartLimitError):
    return JSONResponse(status_code=409, content={"detail": exc.message, "maximum": exc.maximum})


@app.exception_handler(InsufficientStockError)
async def insufficient_stock_handler(request: Request, exc: InsufficientStockError):
    return JSONResponse(
        status_code=409,
        content={
            "detail": exc.message,
            "product_id": exc.product_id,
            "available": exc.available,
            "requested": exc.requested,
        },
    )


@app.exception_handler(StockDecrementError)
async def stock_decrement_handler(request: Request, exc: StockDecrementError):
    logger.error(f"Stock decrement stopped for order {exc.order_id}: {exc.decremented}")
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "order_id": exc.order_id, "decremented": exc.decremented},
    )


@app.exception_handler(ExternalApiError)
async def external_api_handler(request: Request, exc: ExternalApiError):
    logger.error(f"External API error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content={"detail": exc.message})


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "menstyle"}
