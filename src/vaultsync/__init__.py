"""Local-first secrets client with server-arbitrated sync."""

__version__ = "0.1.0"

from .errors import (
    VaultSyncError,
    AuthRequiredError,
    InvalidSessionError,
    TransportError,
    ProtocolError,
    EntryNotFoundError,
    StorageError
)
from .storage import DataType, Entry, LocalStorage, SyncStateTracker
from .auth import TokenCache, Session, AuthService
from .api_clients import RemoteAuthorityClient, ResolutionStrategy, Conflict
from .core import (
    SyncEngine,
    SyncResult,
    SyncState,
    ConflictResolver,
    DataService,
    VaultClient,
    create_client
)

__all__ = [
    "__version__",

    # Errors
    "VaultSyncError",
    "AuthRequiredError",
    "InvalidSessionError",
    "TransportError",
    "ProtocolError",
    "EntryNotFoundError",
    "StorageError",

    # Storage
    "DataType",
    "Entry",
    "LocalStorage",
    "SyncStateTracker",

    # Auth
    "TokenCache",
    "Session",
    "AuthService",

    # Remote
    "RemoteAuthorityClient",
    "ResolutionStrategy",
    "Conflict",

    # Core
    "SyncEngine",
    "SyncResult",
    "SyncState",
    "ConflictResolver",
    "DataService",
    "VaultClient",
    "create_client"
]
