"""File-backed entry store.

Each entry lives in its own JSON file named after the entry id inside the
data directory. Names starting with a dot are control records (sync status,
in-flight temp files) and are never treated as entries.
"""

import json
import os
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from .models import Entry
from ..config.settings import StorageSettings, get_settings
from ..errors import EntryNotFoundError, StorageError
from ..utils.files import ensure_private_dir, write_private_file
from ..utils.logging import LoggerMixin, log_execution_time


def is_control_name(name: str) -> bool:
    """Whether a directory entry is a control record rather than an entry."""
    return name.startswith(".")


def validate_entry_id(entry_id: str) -> None:
    """Reject ids that cannot be used as a single file name.

    Raises:
        ValueError: If the id is empty, hidden or contains a path separator
    """
    if not isinstance(entry_id, str) or not entry_id:
        raise ValueError("entry id must be a non-empty string")
    if is_control_name(entry_id):
        raise ValueError(f"entry id must not start with '.': {entry_id!r}")
    separators = {"/", "\\", os.sep, os.altsep or "/", "\0"}
    if any(sep in entry_id for sep in separators):
        raise ValueError(f"entry id must not contain path separators: {entry_id!r}")


class LocalStorage(LoggerMixin):
    """Thread-safe local storage for entries.

    All reads and writes, including those of the sync state tracker sharing
    this store, serialize through ``self.lock``.
    """

    def __init__(self, settings: Optional[StorageSettings] = None):
        self.settings = settings or get_settings().storage
        self.path = Path(self.settings.data_dir).expanduser()
        self.lock = threading.Lock()
        self.skipped_records = 0

    @log_execution_time
    def add(self, entry: Entry) -> None:
        """Insert or overwrite an entry keyed on its id.

        Raises:
            ValueError: If the id is unusable or the overwrite would move
                ``updated_at`` backwards or change ``created_at``
            StorageError: If the file cannot be written
        """
        validate_entry_id(entry.id)
        data = json.dumps(entry.to_dict()).encode("utf-8")

        with self.lock:
            target = self.path / entry.id
            existing = self._read_existing(target)
            if existing is not None:
                if entry.updated_at < existing.updated_at:
                    raise ValueError(
                        f"updated_at for {entry.id} moved backwards: "
                        f"{entry.updated_at} < {existing.updated_at}"
                    )
                if entry.created_at != existing.created_at:
                    raise ValueError(f"created_at for {entry.id} cannot change")

            try:
                ensure_private_dir(self.path)
                write_private_file(target, data)
            except OSError as e:
                raise StorageError(f"failed to write entry {entry.id}: {e}") from e

        self.logger.debug("Entry saved", entry_id=entry.id, path=str(target))

    @log_execution_time
    def get(self, entry_id: str) -> Entry:
        """Return the entry with the given id.

        Without ``exact_id_lookup`` a missing exact match falls back to the
        first file (in name order) whose name starts with ``entry_id``.

        Raises:
            EntryNotFoundError: If no entry matches
            StorageError: If the matched record cannot be read
        """
        validate_entry_id(entry_id)

        with self.lock:
            name = self._resolve_name(entry_id)
            if name is None:
                raise EntryNotFoundError(entry_id)
            try:
                return self._read_entry(self.path / name)
            except FileNotFoundError:
                raise EntryNotFoundError(entry_id) from None
            except (OSError, ValueError) as e:
                raise StorageError(f"failed to read entry {name}: {e}") from e

    @log_execution_time
    def get_all(self) -> List[Entry]:
        """Return every readable entry.

        An uninitialized store yields an empty list. Corrupt or unreadable
        records are skipped, logged and counted in ``skipped_records``.
        """
        with self.lock:
            return self.read_all_unlocked()

    @log_execution_time
    def delete(self, entry_id: str) -> None:
        """Remove the entry with exactly this id.

        Raises:
            EntryNotFoundError: If it does not exist
            StorageError: If it cannot be removed
        """
        validate_entry_id(entry_id)

        with self.lock:
            try:
                os.remove(self.path / entry_id)
            except FileNotFoundError:
                raise EntryNotFoundError(entry_id) from None
            except OSError as e:
                raise StorageError(f"failed to delete entry {entry_id}: {e}") from e

        self.logger.debug("Entry deleted", entry_id=entry_id)

    def read_all_unlocked(self) -> List[Entry]:
        """Load all entries. The caller must hold ``self.lock``."""
        entries: List[Entry] = []
        skipped: List[Tuple[str, str]] = []

        for name in self._list_names():
            try:
                entries.append(self._read_entry(self.path / name))
            except (OSError, ValueError) as e:
                skipped.append((name, str(e)))

        if skipped:
            self.skipped_records += len(skipped)
            for name, error in skipped:
                self.logger.warning("Skipping unreadable entry record", file=name, error=error)

        return entries

    def _list_names(self) -> List[str]:
        try:
            names = os.listdir(self.path)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"failed to list {self.path}: {e}") from e
        return sorted(name for name in names if not is_control_name(name))

    def _resolve_name(self, entry_id: str) -> Optional[str]:
        if (self.path / entry_id).is_file():
            return entry_id
        if self.settings.exact_id_lookup:
            return None

        for name in self._list_names():
            if name.startswith(entry_id):
                self.logger.warning(
                    "Entry matched by id prefix",
                    requested_id=entry_id,
                    matched_id=name
                )
                return name
        return None

    def _read_existing(self, target: Path) -> Optional[Entry]:
        try:
            return self._read_entry(target)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            self.logger.warning("Overwriting unreadable entry record", file=target.name, error=str(e))
            return None

    @staticmethod
    def _read_entry(path: Path) -> Entry:
        with open(path, "rb") as f:
            raw = f.read()
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            raise ValueError(f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("entry record is not a JSON object")
        return Entry.from_dict(data)
