"""Base JSON-over-HTTP client for the remote authority."""

import asyncio
import json
from typing import Any, Dict, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from ..errors import ProtocolError, TransportError
from ..utils.logging import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseAPIClient:
    """POSTs JSON documents and applies the remote's status conventions.

    A caller-owned ``aiohttp.ClientSession`` can be injected; otherwise a
    session is opened for each request. Timeouts are whatever the injected
    session or ``timeout_seconds`` specify; ``None`` means no deadline.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: Optional[float] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout_seconds = timeout_seconds
        self.requests_sent = 0
        self._owns_session = False
        self.logger = get_logger(self.__class__.__name__)

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(timeout=self._timeout())
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self._owns_session = False

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.timeout_seconds)

    async def post_json(
        self,
        path: str,
        payload: Dict[str, Any],
        stage: str,
        token: Optional[str] = None
    ) -> Any:
        """POST ``payload`` to ``path`` and return the decoded JSON body.

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: On a non-200 status or an undecodable body
        """
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.requests_sent += 1
        self.logger.debug("Sending request", url=url, stage=stage)

        try:
            if self.session is not None:
                status, body = await self._send(self.session, url, payload, headers)
            else:
                async with aiohttp.ClientSession(timeout=self._timeout()) as session:
                    status, body = await self._send(session, url, payload, headers)
        except aiohttp.ClientError as e:
            self.logger.error("Request failed", url=url, stage=stage, error=str(e))
            raise TransportError(f"request failed: {e}", stage=stage) from e
        except asyncio.TimeoutError as e:
            self.logger.error("Request timed out", url=url, stage=stage)
            raise TransportError("request timed out", stage=stage) from e

        if status != 200:
            message = self._error_message(body)
            self.logger.error("Unexpected response status", url=url, stage=stage, status=status)
            if message:
                raise ProtocolError(f"server error: {message}", stage=stage, status_code=status)
            raise ProtocolError(f"unexpected status code: {status}", stage=stage, status_code=status)

        try:
            return json.loads(body)
        except ValueError as e:
            raise ProtocolError(f"failed to decode response: {e}", stage=stage, status_code=status) from e

    @staticmethod
    async def _send(session: aiohttp.ClientSession, url: str, payload: Dict[str, Any], headers: Dict[str, str]):
        async with session.post(url, json=payload, headers=headers) as response:
            return response.status, await response.read()

    @staticmethod
    def _error_message(body: bytes) -> str:
        try:
            data = json.loads(body)
        except ValueError:
            return ""
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            return data["message"]
        return ""

    @staticmethod
    def parse(model: Type[ModelT], data: Any, stage: str) -> ModelT:
        """Validate a decoded body against ``model``.

        Raises:
            ProtocolError: If the body does not fit the model
        """
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ProtocolError(f"failed to decode response: {e}", stage=stage) from e
