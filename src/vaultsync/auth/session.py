"""Explicit authentication session for the local profile."""

from typing import Optional

from .token_cache import TokenCache
from ..errors import AuthRequiredError, StorageError
from ..utils.logging import LoggerMixin


class Session(LoggerMixin):
    """Authentication state of the single local profile.

    The token itself always comes from the cache, so a login or logout by
    another component sharing the same cache is seen on the next read.
    """

    def __init__(self, token_cache: TokenCache):
        self.token_cache = token_cache
        self.user_id: Optional[str] = None

    @property
    def access_token(self) -> Optional[str]:
        return self.token_cache.load()

    def is_authenticated(self) -> bool:
        """Whether a token is cached. Says nothing about server validity."""
        try:
            return self.access_token is not None
        except StorageError:
            return False

    def require_token(self) -> str:
        """Return the cached token.

        Raises:
            AuthRequiredError: If there is no readable token
        """
        try:
            token = self.access_token
        except StorageError as e:
            raise AuthRequiredError(f"authentication required: {e}") from e
        if token is None:
            raise AuthRequiredError("authentication required: no token cached")
        return token

    def begin(self, token: str, user_id: Optional[str] = None) -> None:
        self.token_cache.save(token)
        self.user_id = user_id
        self.logger.info("Session started")

    def end(self) -> None:
        self.token_cache.clear()
        self.user_id = None
        self.logger.info("Session ended")
