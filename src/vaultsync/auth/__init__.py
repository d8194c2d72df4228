"""Authentication module: token cache, session and account operations."""

from .token_cache import TokenCache
from .session import Session
from .service import AuthService

__all__ = ["TokenCache", "Session", "AuthService"]
