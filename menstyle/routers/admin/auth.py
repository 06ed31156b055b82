"""Admin sign-in and sign-out."""
from fastapi import APIRouter, Depends, HTTPException

from menstyle.auth import AuthSession
from menstyle.auth.dependencies import verify_admin
from menstyle.errors import ERROR_NOT_ADMIN, AuthenticationError
from menstyle.logging import get_logger, sanitize_string_for_logging
from menstyle.services.database import get_database
from .models import LoginRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-auth"])


@router.post("/login")
async def admin_login(request: LoginRequest):
    """Sign in and return the access token for later admin calls."""
    db = get_database()
    try:
        session = await db.auth.authenticate(request.email, request.password)
    except AuthenticationError:
        logger.info(f"Admin login refused for {sanitize_string_for_logging(request.email)}")
        raise

    if not session.is_admin:
        await db.auth.sign_out(session.access_token)
        raise HTTPException(status_code=403, detail=ERROR_NOT_ADMIN)

    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "user": {"id": session.user_id, "email": session.email},
    }


@router.post("/logout")
async def admin_logout(admin: AuthSession = Depends(verify_admin)):
    await get_database().auth.sign_out(admin.access_token)
    return {"success": True}


@router.get("/me")
async def admin_me(admin: AuthSession = Depends(verify_admin)):
    return {"id": admin.user_id, "email": admin.email, "is_admin": admin.is_admin}
