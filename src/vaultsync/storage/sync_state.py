"""Per-entry sync bookkeeping used to compute the dirty set."""

import json
import os
from typing import Dict, Iterable, List

from .local_storage import LocalStorage
from .models import Entry, as_int
from ..errors import StorageError
from ..utils.files import ensure_private_dir, write_private_file
from ..utils.logging import LoggerMixin, log_execution_time


class SyncStateTracker(LoggerMixin):
    """Tracks the last synced ``updated_at`` of each entry.

    The status map is a single JSON file next to the entries and is always
    rewritten whole. It shares the store's lock so a status update cannot
    interleave with entry writes.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.path = storage.settings.sync_file_path

    @log_execution_time
    def get_pending_entries(self) -> List[Entry]:
        """Entries never synced or changed since their last sync."""
        with self.storage.lock:
            entries = self.storage.read_all_unlocked()
            status = self._load_unlocked()

        pending = [
            entry for entry in entries
            if entry.id not in status or entry.updated_at > status[entry.id]
        ]

        self.logger.debug("Computed dirty set", total=len(entries), pending=len(pending))
        return pending

    @log_execution_time
    def update_sync_status(self, entries: Iterable[Entry]) -> None:
        """Record ``updated_at`` as the last synced time for each entry.

        Raises:
            StorageError: If the status map cannot be read or written; the
                previous map is left untouched in that case
        """
        entries = list(entries)
        with self.storage.lock:
            status = self._load_unlocked()
            for entry in entries:
                status[entry.id] = entry.updated_at

            data = json.dumps(status, sort_keys=True).encode("utf-8")
            try:
                ensure_private_dir(self.path.parent)
                write_private_file(self.path, data)
            except OSError as e:
                raise StorageError(f"failed to write sync status: {e}") from e

        self.logger.info("Sync status advanced", entries=len(entries))

    def clear_pending_sync(self) -> None:
        """Forget all sync history so every entry is dirty again."""
        with self.storage.lock:
            try:
                os.remove(self.path)
            except FileNotFoundError:
                pass
            except OSError as e:
                raise StorageError(f"failed to clear sync status: {e}") from e

        self.logger.info("Sync status cleared")

    def load_status(self) -> Dict[str, int]:
        """Snapshot of the status map."""
        with self.storage.lock:
            return self._load_unlocked()

    def _load_unlocked(self) -> Dict[str, int]:
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"failed to read sync status: {e}") from e

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("sync status is not a JSON object")
            return {str(key): as_int(value, key) for key, value in data.items()}
        except (TypeError, ValueError, RecursionError) as e:
            raise StorageError(f"corrupt sync status file {self.path}: {e}") from e
