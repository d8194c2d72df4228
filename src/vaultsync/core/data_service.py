"""Entry-level operations for front ends such as a CLI."""

import time
import uuid
from typing import List, Optional, Union

from .resolver import ConflictResolver
from .sync_engine import SyncEngine, SyncResult
from ..api_clients.models import ResolutionResponse, ResolutionStrategy
from ..errors import StorageError
from ..storage.local_storage import LocalStorage
from ..storage.models import DataType, Entry
from ..storage.sync_state import SyncStateTracker
from ..utils.logging import LoggerMixin


class DataService(LoggerMixin):
    """Thin facade over the entry store, sync engine and conflict resolver."""

    def __init__(
        self,
        storage: LocalStorage,
        sync_state: SyncStateTracker,
        sync_engine: Optional[SyncEngine] = None,
        resolver: Optional[ConflictResolver] = None
    ):
        self.storage = storage
        self.sync_state = sync_state
        self.sync_engine = sync_engine
        self.resolver = resolver

    def add(self, entry: Entry) -> None:
        try:
            self.storage.add(entry)
        except StorageError as e:
            raise StorageError(f"failed to save locally: {e}") from e

    def create_entry(self, data_type: Union[DataType, str], payload: bytes) -> Entry:
        """Store a new entry with a fresh id and current timestamps."""
        if isinstance(data_type, str):
            data_type = DataType.from_label(data_type)

        now = int(time.time())
        entry = Entry(
            id=str(uuid.uuid4()),
            type=data_type,
            payload=payload,
            created_at=now,
            updated_at=now,
        )
        self.add(entry)
        self.logger.info("Entry created", entry_id=entry.id, type=entry.type.label)
        return entry

    def update_entry(self, entry_id: str, payload: bytes) -> Entry:
        """Overwrite an entry's payload, bumping ``updated_at``."""
        current = self.get(entry_id)
        entry = Entry(
            id=current.id,
            type=current.type,
            payload=payload,
            created_at=current.created_at,
            updated_at=max(int(time.time()), current.updated_at),
        )
        self.add(entry)
        return entry

    def get(self, entry_id: str) -> Entry:
        return self.storage.get(entry_id)

    def list(self) -> List[Entry]:
        try:
            return self.storage.get_all()
        except StorageError as e:
            raise StorageError(f"failed to get local data: {e}") from e

    def delete(self, entry_id: str) -> None:
        self.storage.delete(entry_id)

    def pending(self) -> List[Entry]:
        """Entries that the next sync round would transmit."""
        return self.sync_state.get_pending_entries()

    async def sync(self) -> SyncResult:
        if self.sync_engine is None:
            raise RuntimeError("DataService was created without a sync engine")
        return await self.sync_engine.sync()

    async def resolve(
        self,
        conflict_id: str,
        strategy: Union[ResolutionStrategy, str]
    ) -> ResolutionResponse:
        """Resolve a conflict remotely. Call ``sync()`` afterwards to pick it up."""
        if self.resolver is None:
            raise RuntimeError("DataService was created without a conflict resolver")
        return await self.resolver.resolve(conflict_id, strategy)
