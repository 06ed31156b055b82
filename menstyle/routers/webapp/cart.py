"""
WebApp Cart Router

The cart lives in server memory under the token sent in ``X-Cart-Token``.
Every response carries the token back, so a client without one learns the
token of its new cart from the first call.
"""
from fastapi import APIRouter, Depends, Response

from menstyle.services.database import get_database
from menstyle.services.domains import CatalogService
from ..deps import CART_TOKEN_HEADER, CartHandle, get_cart_handle
from .models import AddToCartRequest, UpdateCartItemRequest

router = APIRouter(tags=["webapp-cart"])


def _cart_response(handle: CartHandle, response: Response) -> dict:
    response.headers[CART_TOKEN_HEADER] = handle.token
    return handle.to_dict()

@router.get("/cart")
async def get_cart(response: Response, handle: CartHandle = Depends(get_cart_handle)):
    return _cart_response(handle, response)

@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    response: Response,
    handle: CartHandle = Depends(get_cart_handle),
):
    """Add a product in a size; refused above the product's current stock."""
    db = get_database()
    product = await db.catalog.get_product(request.product_id)
    CatalogService.add_to_cart(handle.cart, product, request.size, request.quantity)
    return _cart_response(handle, response)

@router.patch("/cart/items/{line_id}")
async def update_cart_item(
    line_id: str,
    request: UpdateCartItemRequest,
    response: Response,
    handle: CartHandle = Depends(get_cart_handle),
):
    handle.cart.update_quantity(line_id, request.quantity)
    return _cart_response(handle, response)

@router.delete("/cart/items/{line_id}")
async def remove_cart_item(
    line_id: str,
    response: Response,
    handle: CartHandle = Depends(get_cart_handle),
):
    handle.cart.remove_item(line_id)
    return _cart_response(handle, response)

@router.delete("/cart")
async def clear_cart(response: Response, handle: CartHandle = Depends(get_cart_handle)):
    handle.cart.clear_cart()
    return _cart_response(handle, response)
