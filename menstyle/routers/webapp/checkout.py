"""Online checkout endpoint."""
from fastapi import APIRouter, Depends

from menstyle.cart import discard_cart
from menstyle.services.database import get_database
from menstyle.services.money import to_float
from ..deps import CartHandle, get_cart_handle
from .models import CheckoutRequest

router = APIRouter(tags=["webapp-checkout"])


@router.post("/checkout")
async def checkout(request: CheckoutRequest, handle: CartHandle = Depends(get_cart_handle)):
    """
    Save the order and return the WhatsApp hand-off link.

    The cart is dropped only when the order was saved; the next cart call
    starts a new one under a new token.
    """
    db = get_database()
    result = await db.checkout().submit(request.model_dump(), handle.cart)
    discard_cart(handle.token)
    return {
        "order_id": result.order_id,
        "total": to_float(result.total),
        "message": result.message,
        "handoff_url": result.handoff_url,
    }
