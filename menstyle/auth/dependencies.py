"""FastAPI dependencies for the back-office."""
from fastapi import Depends, Header, HTTPException

from menstyle.errors import ERROR_NOT_ADMIN, ERROR_UNAUTHORIZED
from menstyle.services.database import Database, get_database
from .session import AuthSession


async def verify_admin(authorization: str = Header(None, alias="Authorization")) -> AuthSession:
    """Require ``Authorization: Bearer <access token>`` of an admin user."""
    if not authorization:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)

    session = await get_database().auth.session_for_token(parts[1])
    if session is None:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    if not session.is_admin:
        raise HTTPException(status_code=403, detail=ERROR_NOT_ADMIN)
    return session


async def get_admin_database(admin: AuthSession = Depends(verify_admin)) -> Database:
    """Database for one admin request, authorized with that admin's own token."""
    return await get_database().for_user(admin.access_token)
