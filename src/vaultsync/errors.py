"""Error taxonomy shared by the storage, auth and sync layers."""

from typing import Optional


class VaultSyncError(Exception):
    """Base class for all client errors."""
    pass


class AuthRequiredError(VaultSyncError):
    """Raised when no usable bearer token is cached locally."""
    pass


class RemoteError(VaultSyncError):
    """Base class for failures talking to the remote authority.

    ``stage`` names the operation that failed (``token validation``,
    ``sync request``, ``resolve``...) and is also the message prefix.
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        if stage:
            message = f"{stage} failed: {message}"
        super().__init__(message)
        self.stage = stage


class InvalidSessionError(RemoteError):
    """Raised when the remote rejects the token or returns no identity."""
    pass


class TransportError(RemoteError):
    """Raised when the remote authority cannot be reached."""
    pass


class ProtocolError(RemoteError):
    """Raised on a non-success status or an undecodable response."""

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, stage=stage)
        self.status_code = status_code


class EntryNotFoundError(VaultSyncError, KeyError):
    """Raised when a local entry does not exist."""

    def __init__(self, entry_id: str):
        super().__init__(f"entry not found: {entry_id}")
        self.entry_id = entry_id

    def __str__(self) -> str:
        return self.args[0]


class StorageError(VaultSyncError):
    """Raised when the local filesystem cannot be read or written."""
    pass
