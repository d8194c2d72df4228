"""Capability interfaces injected into the sync and auth components."""

from typing import Iterable, List, Protocol, Union

from .api_clients.models import (
    AuthResponse,
    ClientData,
    RegisterResponse,
    ResolutionResponse,
    ResolutionStrategy,
    SyncResponse,
    TokenValidation
)
from .storage.models import Entry


class SyncStateStore(Protocol):
    """Dirty-set bookkeeping, implemented by ``SyncStateTracker``."""

    def get_pending_entries(self) -> List[Entry]: ...

    def update_sync_status(self, entries: Iterable[Entry]) -> None: ...

    def clear_pending_sync(self) -> None: ...


class RemoteAuthority(Protocol):
    """Remote endpoints, implemented by ``RemoteAuthorityClient``."""

    async def register(self, username: str, password: str, email: str) -> RegisterResponse: ...

    async def login(self, username: str, password: str) -> AuthResponse: ...

    async def validate_token(self, token: str) -> TokenValidation: ...

    async def push_data(self, token: str, user_id: str, client_data: List[ClientData]) -> SyncResponse: ...

    async def resolve_conflict(
        self,
        token: str,
        conflict_id: str,
        strategy: Union[ResolutionStrategy, str]
    ) -> ResolutionResponse: ...
