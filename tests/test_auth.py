"""Tests for Supabase Auth sessions"""
import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from supabase import AuthError

from menstyle.auth import AuthService
from menstyle.errors import ERROR_LOGIN_INTERNAL, AuthenticationError
from menstyle.services.repositories import AdminRepository


def make_session(user_id="user-1", email="dono@menstyle.test"):
    return Mock(user=Mock(id=user_id, email=email), access_token="jwt", refresh_token="refresh")


@pytest.fixture
def auth(mock_supabase_client, gateway):
    gateway.tables["admin_users"].append({"id": "user-1", "email": "dono@menstyle.test"})
    return AuthService(
        mock_supabase_client,
        AdminRepository(gateway),
        client_factory=AsyncMock(return_value=mock_supabase_client),
    )


@pytest.mark.asyncio
async def test_check_admin(auth):
    assert await auth.check_admin("user-1") is True
    assert await auth.check_admin("user-2") is False
    assert await auth.check_admin(None) is False


@pytest.mark.asyncio
async def test_check_admin_error_means_not_admin(auth, gateway):
    gateway.fail_on.add("get")

    assert await auth.check_admin("user-1") is False


@pytest.mark.asyncio
async def test_get_session(auth, mock_supabase_client):
    mock_supabase_client.auth.get_session.return_value = make_session()

    session = await auth.get_session()

    assert session.user_id == "user-1"
    assert session.access_token == "jwt"
    assert session.is_admin is True


@pytest.mark.asyncio
async def test_get_session_signed_out(auth):
    assert await auth.get_session() is None


@pytest.mark.asyncio
async def test_sign_in_success(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.return_value = Mock(session=make_session())

    assert await auth.sign_in("dono@menstyle.test", "secret") is None
    mock_supabase_client.auth.sign_in_with_password.assert_awaited_once_with(
        {"email": "dono@menstyle.test", "password": "secret"}
    )


@pytest.mark.asyncio
async def test_sign_in_refused(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.side_effect = AuthError(
        "Invalid login credentials", None
    )

    assert await auth.sign_in("dono@menstyle.test", "wrong") == "Invalid login credentials"


@pytest.mark.asyncio
async def test_sign_in_unexpected_failure(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.side_effect = RuntimeError("boom")

    assert await auth.sign_in("dono@menstyle.test", "secret") == ERROR_LOGIN_INTERNAL


@pytest.mark.asyncio
async def test_session_for_token(auth, mock_supabase_client):
    mock_supabase_client.auth.get_user.return_value = Mock(user=Mock(id="user-2", email="x@y"))

    session = await auth.session_for_token("token")

    assert session.user_id == "user-2"
    assert session.is_admin is False


@pytest.mark.asyncio
async def test_session_for_invalid_token(auth, mock_supabase_client):
    mock_supabase_client.auth.get_user.side_effect = AuthError("invalid JWT", None)

    assert await auth.session_for_token("bad") is None


@pytest.mark.asyncio
async def test_subscribe_delivers_sessions(auth, mock_supabase_client):
    inner = Mock()
    mock_supabase_client.auth.on_auth_state_change = Mock(return_value=inner)
    received = []

    subscription = auth.subscribe(received.append)
    listener = mock_supabase_client.auth.on_auth_state_change.call_args[0][0]
    listener("SIGNED_IN", make_session())
    listener("SIGNED_OUT", None)
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert [s.user_id if s else None for s in received] == ["user-1", None]
    assert received[0].is_admin is True

    subscription.unsubscribe()
    inner.unsubscribe.assert_called_once()


@pytest.mark.asyncio
async def test_authenticate_returns_session_of_response(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.return_value = Mock(session=make_session())

    session = await auth.authenticate("dono@menstyle.test", "secret")

    assert session.user_id == "user-1"
    assert session.access_token == "jwt"
    assert session.refresh_token == "refresh"
    assert session.is_admin is True
    mock_supabase_client.auth.get_session.assert_not_called()


@pytest.mark.asyncio
async def test_authenticate_refused(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.side_effect = AuthError(
        "Invalid login credentials", None
    )

    with pytest.raises(AuthenticationError) as exc_info:
        await auth.authenticate("dono@menstyle.test", "wrong")

    assert exc_info.value.message == "Invalid login credentials"


@pytest.mark.asyncio
async def test_sign_in_without_session(auth, mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.return_value = Mock(session=None)

    assert await auth.sign_in("dono@menstyle.test", "secret") == ERROR_LOGIN_INTERNAL


@pytest.mark.asyncio
async def test_concurrent_sign_ins_keep_their_own_tokens(mock_supabase_client, gateway):
    async def sign_in_with_password(credentials):
        await asyncio.sleep(0)
        user = credentials["email"].split("@")[0]
        return Mock(session=Mock(
            user=Mock(id=f"user-{user}", email=credentials["email"]),
            access_token=f"tok-{user}",
            refresh_token=f"refresh-{user}",
        ))

    async def private_client():
        client = Mock()
        client.auth.sign_in_with_password = sign_in_with_password
        await asyncio.sleep(0)
        return client

    auth = AuthService(mock_supabase_client, AdminRepository(gateway), client_factory=private_client)

    first, second = await asyncio.gather(
        auth.authenticate("a@menstyle.test", "x"),
        auth.authenticate("b@menstyle.test", "x"),
    )

    assert (first.user_id, first.access_token) == ("user-a", "tok-a")
    assert (second.user_id, second.access_token) == ("user-b", "tok-b")
    mock_supabase_client.auth.sign_in_with_password.assert_not_called()


@pytest.mark.asyncio
async def test_sign_out_with_token_ends_that_session(auth, mock_supabase_client):
    await auth.sign_out("jwt-a")

    mock_supabase_client.auth.admin.sign_out.assert_awaited_once_with("jwt-a", "local")
    mock_supabase_client.auth.sign_out.assert_not_called()


@pytest.mark.asyncio
async def test_sign_out_failure_is_logged(auth, mock_supabase_client):
    mock_supabase_client.auth.admin.sign_out.side_effect = AuthError("session not found", None)

    await auth.sign_out("jwt-a")
