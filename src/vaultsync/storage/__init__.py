"""Local persistence for entries and their sync state."""

from .models import DataType, Entry
from .local_storage import LocalStorage, validate_entry_id
from .sync_state import SyncStateTracker

__all__ = [
    "DataType",
    "Entry",
    "LocalStorage",
    "validate_entry_id",
    "SyncStateTracker"
]
