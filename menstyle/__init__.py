"""
MenStyle Store Core

- db: Supabase clients
- cart: per-session cart store
- orders: checkout and local-sale order assembly
- services: data gateway, repositories, domain services
- auth: Supabase Auth sessions and the admin guard

Note: Imports are lazy so importing a submodule does not pull in the
Supabase client.
"""

__all__ = [
    "get_supabase",
    "get_supabase_sync",
    "get_database",
    "init_database",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_supabase":
        from menstyle.db import get_supabase
        return get_supabase
    elif name == "get_supabase_sync":
        from menstyle.db import get_supabase_sync
        return get_supabase_sync
    elif name == "get_database":
        from menstyle.services.database import get_database
        return get_database
    elif name == "init_database":
        from menstyle.services.database import init_database
        return init_database
    raise AttributeError(f"module 'menstyle' has no attribute '{name}'")
