"""Bearer token cache on disk."""

import os
from pathlib import Path
from typing import Optional

from ..config.settings import AuthSettings, get_settings
from ..errors import StorageError
from ..utils.files import write_private_file
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TokenCache:
    """Persists a single bearer token at a well-known path, mode 0600."""

    def __init__(self, token_path: Optional[Path] = None, settings: Optional[AuthSettings] = None):
        settings = settings or get_settings().auth
        self.path = Path(token_path or settings.token_path).expanduser()

    def save(self, token: str) -> None:
        """Store ``token``, replacing any previous one."""
        if not token:
            raise ValueError("token must be a non-empty string")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            write_private_file(self.path, token.encode("utf-8"))
        except OSError as e:
            raise StorageError(f"failed to save token: {e}") from e
        logger.debug("Token saved", path=str(self.path))

    def load(self) -> Optional[str]:
        """Return the cached token, or ``None`` when not authenticated.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"failed to load token: {e}") from e

        try:
            token = raw.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise StorageError(f"failed to load token: {e}") from e
        return token or None

    def clear(self) -> None:
        """Remove the cached token. A missing token is not an error."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"failed to clear token: {e}") from e
        logger.debug("Token cleared", path=str(self.path))
