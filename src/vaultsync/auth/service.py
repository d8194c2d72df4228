"""Account operations: register, login, logout and status."""

from typing import Optional, Tuple

from .session import Session
from ..api_clients.models import AuthResponse, RegisterResponse
from ..interfaces import RemoteAuthority, SyncStateStore
from ..errors import ProtocolError
from ..utils.logging import LoggerMixin, log_async_execution_time


class AuthService(LoggerMixin):
    """Manages the local profile's credentials against the remote authority."""

    def __init__(
        self,
        session: Session,
        remote: RemoteAuthority,
        sync_state: Optional[SyncStateStore] = None
    ):
        self.session = session
        self.remote = remote
        self.sync_state = sync_state

    @log_async_execution_time
    async def register(self, username: str, password: str, email: str) -> RegisterResponse:
        response = await self.remote.register(username, password, email)
        self.logger.info("User registered", user_id=response.user_id)
        return response

    @log_async_execution_time
    async def login(self, username: str, password: str) -> AuthResponse:
        """Authenticate and cache the returned access token.

        Raises:
            ProtocolError: If the remote returns an empty token
        """
        response = await self.remote.login(username, password)
        if not response.access_token:
            raise ProtocolError("server returned empty token", stage="login")

        self.session.begin(response.access_token)
        self.logger.info("Login successful", username=username)
        return response

    def logout(self) -> None:
        """Drop the cached token and wipe sync history."""
        self.session.end()
        if self.sync_state is not None:
            self.sync_state.clear_pending_sync()
        self.logger.info("Logged out")

    async def status(self) -> Tuple[bool, str]:
        """Return ``(valid, user_id)`` for the cached token.

        No token means ``(False, "")`` without contacting the remote.
        """
        token = self.session.access_token
        if token is None:
            return False, ""

        validation = await self.remote.validate_token(token)
        if validation.valid and validation.user_id:
            self.session.user_id = validation.user_id
        return validation.valid, validation.user_id
