"""Authentication package."""
from .session import AuthService, AuthSession, AuthSubscription

__all__ = [
    "AuthService",
    "AuthSession",
    "AuthSubscription",
]
