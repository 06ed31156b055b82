"""Supabase Auth sessions and the admin flag."""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Set

from supabase import AuthError
from supabase._async.client import AsyncClient

from menstyle.db import create_scoped_client
from menstyle.errors import ERROR_LOGIN_INTERNAL, AuthenticationError, ExternalApiError
from menstyle.logging import get_logger, sanitize_id_for_logging
from menstyle.services.repositories import AdminRepository

logger = get_logger(__name__)


@dataclass
class AuthSession:
    """Signed-in user as seen by the store."""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    is_admin: bool = False


SessionCallback = Callable[[Optional[AuthSession]], Awaitable[None] | None]
ClientFactory = Callable[[], Awaitable[AsyncClient]]


class AuthSubscription:
    """Handle returned by ``AuthService.subscribe``."""

    def __init__(self, inner: Any):
        self._inner = inner

    def unsubscribe(self) -> None:
        self._inner.unsubscribe()


class AuthService:
    """
    Sign-in, sign-out and session lookups against Supabase Auth.

    Sign-ins run on a private client from ``client_factory`` so the shared
    ``client`` never holds a user session.
    """

    def __init__(
        self,
        client: AsyncClient,
        admins: AdminRepository,
        client_factory: ClientFactory = create_scoped_client,
    ):
        self.client = client
        self.admins = admins
        self.client_factory = client_factory
        self._pending: Set[asyncio.Task] = set()

    async def check_admin(self, user_id: Optional[str]) -> bool:
        """A row in admin_users means admin; anything else, errors included, does not."""
        if not user_id:
            return False
        try:
            return await self.admins.get_by_id(user_id) is not None
        except ExternalApiError as e:
            logger.warning(f"Admin check failed for {sanitize_id_for_logging(user_id)}: {e}")
            return False

    async def _build_session(self, session: Any) -> Optional[AuthSession]:
        user = getattr(session, "user", None)
        if session is None or user is None:
            return None
        return AuthSession(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            access_token=getattr(session, "access_token", None),
            refresh_token=getattr(session, "refresh_token", None),
            is_admin=await self.check_admin(str(user.id)),
        )

    async def get_session(self) -> Optional[AuthSession]:
        """Current session of the client, or None when signed out."""
        try:
            session = await self.client.auth.get_session()
        except AuthError as e:
            logger.warning(f"Session lookup failed: {e}")
            return None
        return await self._build_session(session)

    async def session_for_token(self, access_token: str) -> Optional[AuthSession]:
        """Resolve a bearer access token to its user, or None if invalid."""
        try:
            response = await self.client.auth.get_user(access_token)
        except AuthError as e:
            logger.info(f"Rejected access token: {e}")
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return AuthSession(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            access_token=access_token,
            is_admin=await self.check_admin(str(user.id)),
        )

    def subscribe(self, callback: SessionCallback) -> AuthSubscription:
        """
        Call ``callback`` with the new session (or None) on every auth change.

        The admin flag is looked up asynchronously, so the callback runs in a
        task on the current event loop.
        """

        async def dispatch(session: Any) -> None:
            result = callback(await self._build_session(session))
            if asyncio.iscoroutine(result):
                await result

        def listener(event: Any, session: Any) -> None:
            task = asyncio.get_running_loop().create_task(dispatch(session))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return AuthSubscription(self.client.auth.on_auth_state_change(listener))

    async def authenticate(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password and return that sign-in's session.

        The session comes from the sign-in response, never from client state.

        Raises:
            AuthenticationError: credentials refused or the auth service failed
        """
        try:
            client = await self.client_factory()
            response = await client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise AuthenticationError(e.message) from e
        except Exception as e:
            logger.error("Sign-in failed", exc_info=True)
            raise AuthenticationError(ERROR_LOGIN_INTERNAL) from e

        session = await self._build_session(getattr(response, "session", None))
        if session is None:
            raise AuthenticationError(ERROR_LOGIN_INTERNAL)
        return session

    async def sign_in(self, email: str, password: str) -> Optional[str]:
        """
        Sign in with email and password.

        Returns:
            None on success, otherwise the message to show the operator
        """
        try:
            await self.authenticate(email, password)
        except AuthenticationError as e:
            return e.message
        return None

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        """End the session of ``access_token``, or the shared client's own session."""
        try:
            if access_token:
                await self.client.auth.admin.sign_out(access_token, "local")
            else:
                await self.client.auth.sign_out()
        except AuthError as e:
            logger.warning(f"Sign-out failed: {e}")
