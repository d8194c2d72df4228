"""Tests for the token cache, session and account operations."""

import os
import stat

import pytest

from conftest import FakeRemote, make_entry
from vaultsync.api_clients.models import AuthResponse, TokenValidation
from vaultsync.auth import AuthService, Session, TokenCache
from vaultsync.core import SyncEngine
from vaultsync.errors import AuthRequiredError, ProtocolError, StorageError


class TestTokenCache:

    def test_save_and_load(self, token_cache):
        token_cache.save("abc.def")
        assert token_cache.load() == "abc.def"

    def test_token_file_is_owner_only(self, token_cache):
        token_cache.save("abc")
        assert stat.S_IMODE(os.stat(token_cache.path).st_mode) == 0o600

    def test_save_replaces_broader_permissions(self, token_cache):
        token_cache.path.parent.mkdir(parents=True)
        token_cache.path.write_text("old")
        os.chmod(token_cache.path, 0o644)

        token_cache.save("new")

        assert stat.S_IMODE(os.stat(token_cache.path).st_mode) == 0o600
        assert token_cache.load() == "new"

    def test_missing_file_means_not_authenticated(self, token_cache):
        assert token_cache.load() is None

    def test_empty_file_means_not_authenticated(self, token_cache):
        token_cache.path.parent.mkdir(parents=True)
        token_cache.path.write_text("  \n")
        assert token_cache.load() is None

    def test_clear(self, token_cache):
        token_cache.save("abc")
        token_cache.clear()

        assert not token_cache.path.exists()
        token_cache.clear()

    def test_undecodable_token_is_storage_error(self, token_cache):
        token_cache.path.parent.mkdir(parents=True)
        token_cache.path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(StorageError, match="failed to load token"):
            token_cache.load()

    def test_rejects_empty_token(self, token_cache):
        with pytest.raises(ValueError):
            token_cache.save("")

    def test_explicit_path_overrides_settings(self, tmp_path, settings):
        cache = TokenCache(token_path=tmp_path / "other", settings=settings.auth)
        assert cache.path == tmp_path / "other"


class TestSession:

    def test_require_token_without_token(self, session):
        assert not session.is_authenticated()
        with pytest.raises(AuthRequiredError):
            session.require_token()

    def test_begin_and_end(self, session, token_cache):
        session.begin("tok", user_id="u1")

        assert session.is_authenticated()
        assert session.require_token() == "tok"
        assert token_cache.load() == "tok"

        session.end()
        assert not session.is_authenticated()
        assert session.user_id is None

    @pytest.mark.parametrize("corrupt", ["undecodable", "directory"])
    def test_unreadable_token_requires_authentication(self, session, token_cache, corrupt):
        token_cache.path.parent.mkdir(parents=True)
        if corrupt == "directory":
            token_cache.path.mkdir()
        else:
            token_cache.path.write_bytes(b"\xff\xfe\xfa")

        assert not session.is_authenticated()
        with pytest.raises(AuthRequiredError, match="failed to load token"):
            session.require_token()

    @pytest.mark.asyncio
    async def test_unreadable_token_blocks_sync_without_network(self, session, token_cache, storage, tracker):
        storage.add(make_entry("e1"))
        token_cache.path.parent.mkdir(parents=True)
        token_cache.path.write_bytes(b"\xff\xfe\xfa")
        remote = FakeRemote()

        with pytest.raises(AuthRequiredError):
            await SyncEngine(session, tracker, remote).sync()

        assert remote.network_calls == 0
        assert not tracker.path.exists()

    def test_sees_token_written_by_another_cache(self, session, settings):
        TokenCache(settings=settings.auth).save("from-elsewhere")
        assert session.access_token == "from-elsewhere"


class TestAuthService:

    @pytest.mark.asyncio
    async def test_login_caches_token(self, session):
        remote = FakeRemote(login_response=AuthResponse(access_token="t-1", refresh_token="r", expires_in="3600"))
        service = AuthService(session, remote)

        response = await service.login("alice", "pw")

        assert response.access_token == "t-1"
        assert session.access_token == "t-1"

    @pytest.mark.asyncio
    async def test_login_rejects_empty_token(self, session):
        remote = FakeRemote(login_response=AuthResponse(access_token=""))
        service = AuthService(session, remote)

        with pytest.raises(ProtocolError, match="login failed: server returned empty token"):
            await service.login("alice", "pw")
        assert not session.is_authenticated()

    @pytest.mark.asyncio
    async def test_register(self, session, fake_remote):
        response = await AuthService(session, fake_remote).register("alice", "pw", "a@example.com")

        assert response.user_id == "user-1"
        assert fake_remote.calls[0][0] == "register"

    def test_logout_clears_token_and_sync_status(self, authed_session, storage, tracker, fake_remote):
        entry = make_entry("e1")
        storage.add(entry)
        tracker.update_sync_status([entry])

        AuthService(authed_session, fake_remote, tracker).logout()

        assert not authed_session.is_authenticated()
        assert [e.id for e in tracker.get_pending_entries()] == ["e1"]
        assert fake_remote.network_calls == 0

    @pytest.mark.asyncio
    async def test_status_without_token_skips_network(self, session, fake_remote):
        assert await AuthService(session, fake_remote).status() == (False, "")
        assert fake_remote.network_calls == 0

    @pytest.mark.asyncio
    async def test_status_with_valid_token(self, authed_session, fake_remote):
        assert await AuthService(authed_session, fake_remote).status() == (True, "user-1")
        assert authed_session.user_id == "user-1"

    @pytest.mark.asyncio
    async def test_status_with_rejected_token(self, authed_session):
        remote = FakeRemote(validation=TokenValidation(valid=False, user_id=""))
        assert await AuthService(authed_session, remote).status() == (False, "")
