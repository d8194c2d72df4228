"""Wires the client's components together from settings."""

from dataclasses import dataclass
from typing import Optional

from .data_service import DataService
from .resolver import ConflictResolver
from .sync_engine import SyncEngine
from ..api_clients.remote import RemoteAuthorityClient
from ..auth.service import AuthService
from ..auth.session import Session
from ..auth.token_cache import TokenCache
from ..config.settings import AppSettings, get_settings
from ..interfaces import RemoteAuthority
from ..storage.local_storage import LocalStorage
from ..storage.sync_state import SyncStateTracker


@dataclass
class VaultClient:
    """Every component of one local profile, sharing one store and session."""

    storage: LocalStorage
    sync_state: SyncStateTracker
    session: Session
    remote: RemoteAuthority
    sync_engine: SyncEngine
    resolver: ConflictResolver
    data: DataService
    auth: AuthService


def create_client(
    settings: Optional[AppSettings] = None,
    remote: Optional[RemoteAuthority] = None
) -> VaultClient:
    """Build a client for the configured profile.

    Args:
        settings: Settings to use instead of the process-wide ones
        remote: Remote authority implementation; defaults to the HTTP client
    """
    settings = settings or get_settings()

    storage = LocalStorage(settings.storage)
    sync_state = SyncStateTracker(storage)
    session = Session(TokenCache(settings=settings.auth))
    remote = remote or RemoteAuthorityClient(settings=settings.remote)

    sync_engine = SyncEngine(session, sync_state, remote)
    resolver = ConflictResolver(session, remote)

    return VaultClient(
        storage=storage,
        sync_state=sync_state,
        session=session,
        remote=remote,
        sync_engine=sync_engine,
        resolver=resolver,
        data=DataService(storage, sync_state, sync_engine, resolver),
        auth=AuthService(session, remote, sync_state),
    )
