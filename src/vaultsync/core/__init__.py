"""Core sync, conflict resolution and data access logic."""

from .sync_engine import SyncEngine, SyncResult, SyncState
from .resolver import ConflictResolver
from .data_service import DataService
from .factory import VaultClient, create_client

__all__ = [
    "SyncEngine",
    "SyncResult",
    "SyncState",
    "ConflictResolver",
    "DataService",
    "VaultClient",
    "create_client"
]
