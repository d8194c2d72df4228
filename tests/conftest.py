"""Shared fixtures for the client test suite."""

import json
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from vaultsync.api_clients.models import (
    AuthResponse,
    RegisterResponse,
    ResolutionResponse,
    SyncResponse,
    TokenValidation
)
from vaultsync.auth import Session, TokenCache
from vaultsync.config import AppSettings
from vaultsync.storage import DataType, Entry, LocalStorage, SyncStateTracker


def make_entry(entry_id: str = "e1", updated_at: int = 100, payload: bytes = b"x", **kwargs) -> Entry:
    """Create a test entry."""
    return Entry(
        id=entry_id,
        type=kwargs.get("type", DataType.LOGIN),
        payload=payload,
        created_at=kwargs.get("created_at", 50),
        updated_at=updated_at,
    )


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    """Settings pointing every path into a temp directory."""
    return AppSettings(
        storage={"data_dir": tmp_path / "pm_data"},
        auth={"token_path": tmp_path / "home" / ".pm_token"},
        remote={"base_url": "http://remote.invalid"},
    )


@pytest.fixture
def storage(settings) -> LocalStorage:
    return LocalStorage(settings.storage)


@pytest.fixture
def tracker(storage) -> SyncStateTracker:
    return SyncStateTracker(storage)


@pytest.fixture
def token_cache(settings) -> TokenCache:
    return TokenCache(settings=settings.auth)


@pytest.fixture
def session(token_cache) -> Session:
    return Session(token_cache)


@pytest.fixture
def authed_session(session) -> Session:
    session.begin("secret-token")
    return session


class FakeRemote:
    """In-memory remote authority that records every call."""

    def __init__(
        self,
        validation: Optional[TokenValidation] = None,
        sync_response: Optional[SyncResponse] = None,
        resolution: Optional[ResolutionResponse] = None,
        login_response: Optional[AuthResponse] = None
    ):
        self.validation = validation or TokenValidation(valid=True, user_id="user-1")
        self.sync_response = sync_response or SyncResponse(success=True, conflicts=[])
        self.resolution = resolution or ResolutionResponse(success=True, message="resolved")
        self.login_response = login_response or AuthResponse(access_token="fresh-token")
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    @property
    def network_calls(self) -> int:
        return len(self.calls)

    def _record(self, name: str, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    async def register(self, username, password, email):
        self._record("register", username, email)
        return RegisterResponse(user_id="user-1", message="User registered successfully")

    async def login(self, username, password):
        self._record("login", username)
        return self.login_response

    async def validate_token(self, token):
        self._record("validate_token", token)
        return self.validation

    async def push_data(self, token, user_id, client_data):
        self._record("push_data", token, user_id, client_data)
        return self.sync_response

    async def resolve_conflict(self, token, conflict_id, strategy):
        self._record("resolve_conflict", token, conflict_id, strategy)
        return self.resolution


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


class RecordingApp:
    """Routes for an in-process remote authority.

    ``responses`` maps a path to ``(status, body)``; a body that is not
    ``bytes`` is JSON encoded. Every request is kept in ``requests``.
    """

    def __init__(self, responses: Dict[str, Tuple[int, Any]]):
        self.responses = responses
        self.requests: List[Dict[str, Any]] = []

    async def handle(self, request: web.Request) -> web.Response:
        raw = await request.read()
        self.requests.append({
            "path": request.path,
            "json": json.loads(raw) if raw else None,
            "authorization": request.headers.get("Authorization"),
        })
        status, body = self.responses.get(request.path, (404, {"message": "no such route"}))
        if not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        return web.Response(status=status, body=body, content_type="application/json")

    def paths(self) -> List[str]:
        return [item["path"] for item in self.requests]


@asynccontextmanager
async def remote_server(responses: Dict[str, Tuple[int, Any]]):
    """Run a ``RecordingApp`` and yield ``(app, base_url)``."""
    recorder = RecordingApp(responses)
    app = web.Application()
    app.router.add_route("POST", "/{tail:.*}", recorder.handle)

    server = TestServer(app)
    await server.start_server()
    try:
        yield recorder, f"http://{server.host}:{server.port}"
    finally:
        await server.close()
