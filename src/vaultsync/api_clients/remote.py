"""Client for the remote authority's auth and sync endpoints."""

from typing import List, Optional, Union

import aiohttp

from .base import BaseAPIClient
from .models import (
    AuthResponse,
    ClientData,
    RegisterResponse,
    ResolutionResponse,
    ResolutionStrategy,
    SyncResponse,
    TokenValidation
)
from ..config.settings import RemoteSettings, get_settings


class RemoteAuthorityClient(BaseAPIClient):
    """Wraps the remote authority's JSON endpoints.

    Each method names its stage so failures read as
    ``"<stage> failed: <reason>"``.
    """

    REGISTER_PATH = "/v1/auth/register"
    LOGIN_PATH = "/v1/auth/login"
    VALIDATE_TOKEN_PATH = "/v1/auth/validate-token"
    SYNC_DATA_PATH = "/v1/sync/data"
    RESOLVE_PATH = "/v1/sync/resolve"

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        settings: Optional[RemoteSettings] = None
    ):
        settings = settings or get_settings().remote
        super().__init__(
            base_url or settings.base_url,
            session=session,
            timeout_seconds=settings.timeout_seconds
        )

    async def register(self, username: str, password: str, email: str) -> RegisterResponse:
        stage = "register"
        body = await self.post_json(
            self.REGISTER_PATH,
            {"username": username, "password": password, "email": email},
            stage=stage
        )
        return self.parse(RegisterResponse, body, stage)

    async def login(self, username: str, password: str) -> AuthResponse:
        stage = "login"
        body = await self.post_json(
            self.LOGIN_PATH,
            {"username": username, "password": password},
            stage=stage
        )
        return self.parse(AuthResponse, body, stage)

    async def validate_token(self, token: str) -> TokenValidation:
        """Ask the remote whether ``token`` is live and whose it is."""
        stage = "token validation"
        body = await self.post_json(
            self.VALIDATE_TOKEN_PATH,
            {"token": token},
            stage=stage,
            token=token
        )
        return self.parse(TokenValidation, body, stage)

    async def push_data(self, token: str, user_id: str, client_data: List[ClientData]) -> SyncResponse:
        """Submit one batch of changed entries."""
        stage = "sync request"
        body = await self.post_json(
            self.SYNC_DATA_PATH,
            {
                "user_id": user_id,
                "client_data": [item.model_dump() for item in client_data],
            },
            stage=stage,
            token=token
        )
        return self.parse(SyncResponse, body, stage)

    async def resolve_conflict(
        self,
        token: str,
        conflict_id: str,
        strategy: Union[ResolutionStrategy, str]
    ) -> ResolutionResponse:
        stage = "resolve"
        value = strategy.value if isinstance(strategy, ResolutionStrategy) else strategy
        body = await self.post_json(
            self.RESOLVE_PATH,
            {"conflict_id": conflict_id, "strategy": value},
            stage=stage,
            token=token
        )
        return self.parse(ResolutionResponse, body, stage)
