"""Sync engine: pushes the dirty set to the remote authority."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..api_clients.models import ClientData, Conflict
from ..auth.session import Session
from ..errors import InvalidSessionError
from ..interfaces import RemoteAuthority, SyncStateStore
from ..utils.logging import get_logger, log_async_execution_time


class SyncState(str, Enum):
    """Phases of one sync round."""

    IDLE = "idle"
    TOKEN_VALIDATING = "token_validating"
    GATHERING_DIRTY = "gathering_dirty"
    TRANSMITTING = "transmitting"
    RECONCILING = "reconciling"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class SyncResult:
    """Result of a sync round."""

    user_id: str
    success: bool
    transmitted_ids: List[str] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)
    committed: bool = False
    sync_duration: Optional[float] = None

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def entries_transmitted(self) -> int:
        return len(self.transmitted_ids)


class SyncEngine:
    """Runs sync rounds for the local profile.

    Status advancement is all-or-nothing per batch: when the remote reports
    any conflict, no transmitted entry is marked synced, including the ones
    that did not conflict. They are all sent again on the next round.
    """

    def __init__(self, session: Session, sync_state: SyncStateStore, remote: RemoteAuthority):
        """Initialize sync engine.

        Args:
            session: Authentication session supplying the bearer token
            sync_state: Dirty-set tracker sharing the entry store's lock
            remote: Remote authority client
        """
        self.session = session
        self.sync_state = sync_state
        self.remote = remote
        self.state = SyncState.IDLE
        self.last_result: Optional[SyncResult] = None
        self.logger = get_logger(self.__class__.__name__)

    @log_async_execution_time
    async def sync(self) -> SyncResult:
        """Run one sync round.

        Raises:
            AuthRequiredError: No token is cached; nothing is sent
            InvalidSessionError: The remote rejected the token
            TransportError: The remote could not be reached
            ProtocolError: The remote answered with an error or garbage
            StorageError: Local state could not be read or written
        """
        start_time = time.perf_counter()
        self.state = SyncState.IDLE

        try:
            token = self.session.require_token()

            self._transition(SyncState.TOKEN_VALIDATING)
            user_id = await self._validate(token)

            self._transition(SyncState.GATHERING_DIRTY)
            entries = self.sync_state.get_pending_entries()
            client_data = [ClientData.from_entry(entry) for entry in entries]

            self._transition(SyncState.TRANSMITTING)
            self.logger.info("Submitting sync batch", entries=len(client_data))
            response = await self.remote.push_data(token, user_id, client_data)

            self._transition(SyncState.RECONCILING)
            result = SyncResult(
                user_id=user_id,
                success=response.success,
                transmitted_ids=[entry.id for entry in entries],
                conflicts=list(response.conflicts)
            )

            if result.has_conflicts:
                self.logger.warning(
                    "Sync reported conflicts; batch left pending",
                    conflicts=len(result.conflicts),
                    entries=len(entries)
                )
            else:
                if not response.success:
                    self.logger.warning("Remote reported success=false without conflicts")
                self.sync_state.update_sync_status(entries)
                result.committed = True

        except Exception as e:
            self.state = SyncState.FAILED
            self.logger.error("Sync failed", error=str(e))
            raise

        result.sync_duration = time.perf_counter() - start_time
        self._transition(SyncState.COMPLETE)
        self.last_result = result

        self.logger.info(
            "Sync completed",
            entries=result.entries_transmitted,
            conflicts=len(result.conflicts),
            committed=result.committed,
            duration=f"{result.sync_duration:.2f}s"
        )
        return result

    async def _validate(self, token: str) -> str:
        stage = "token validation"
        validation = await self.remote.validate_token(token)
        if not validation.valid:
            raise InvalidSessionError("invalid token", stage=stage)
        if not validation.user_id:
            raise InvalidSessionError("server returned empty user_id", stage=stage)

        self.session.user_id = validation.user_id
        return validation.user_id

    def _transition(self, state: SyncState) -> None:
        self.logger.debug("Sync state change", previous=self.state.value, next=state.value)
        self.state = state
