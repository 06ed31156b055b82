"""
Supabase connection settings and clients.

The store reaches Supabase with the project URL and its public (anon) key
only; row-level security decides what that key may read or write. The async
client serves the API; the sync client is for maintenance scripts.
"""

import os
from typing import Optional

from supabase import AsyncClientOptions, Client, create_client
from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client

from menstyle.constants import DEFAULT_STORAGE_BUCKET

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

STORAGE_BUCKET = os.environ.get("STORAGE_BUCKET", DEFAULT_STORAGE_BUCKET)

_sync_client: Optional[Client] = None
_async_client: Optional[AsyncClient] = None


def _credentials() -> tuple[str, str]:
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
    return SUPABASE_URL, SUPABASE_ANON_KEY


def get_supabase_sync() -> Client:
    """Shared blocking client (scripts)."""
    global _sync_client
    if _sync_client is None:
        _sync_client = create_client(*_credentials())
    return _sync_client


async def get_supabase() -> AsyncClient:
    """Shared async client used by the API (data, auth, storage)."""
    global _async_client
    if _async_client is None:
        _async_client = await acreate_client(*_credentials())
    return _async_client


async def create_scoped_client(access_token: Optional[str] = None) -> AsyncClient:
    """
    Private async client that keeps no session of its own.

    With ``access_token`` every data and storage call runs as that user;
    without it the client is a scratch client for one sign-in.
    """
    options = AsyncClientOptions(auto_refresh_token=False, persist_session=False)
    if access_token:
        options.headers = {**options.headers, "Authorization": f"Bearer {access_token}"}
    return await acreate_client(*_credentials(), options=options)


def reset_clients() -> None:
    """Forget both clients, so the next call connects again."""
    global _sync_client, _async_client
    _sync_client = None
    _async_client = None
