"""Submits conflict resolution decisions to the remote authority."""

from typing import Union

from ..api_clients.models import ResolutionResponse, ResolutionStrategy
from ..auth.session import Session
from ..interfaces import RemoteAuthority
from ..utils.logging import LoggerMixin, log_async_execution_time


class ConflictResolver(LoggerMixin):
    """Resolves conflicts reported by a previous sync round.

    Resolution happens on the remote only. Local entries are not touched;
    run another sync round to pick up the outcome.
    """

    def __init__(self, session: Session, remote: RemoteAuthority):
        self.session = session
        self.remote = remote

    @log_async_execution_time
    async def resolve(
        self,
        conflict_id: str,
        strategy: Union[ResolutionStrategy, str]
    ) -> ResolutionResponse:
        """Send ``strategy`` for ``conflict_id``.

        Known strategy names are normalized to ``ResolutionStrategy``; any
        other string is forwarded as-is for the remote to accept or reject.

        Raises:
            AuthRequiredError: No token is cached; nothing is sent
            TransportError: The remote could not be reached
            ProtocolError: The remote answered with an error or garbage
        """
        if not isinstance(conflict_id, str) or not conflict_id:
            raise ValueError("conflict id must be a non-empty string")
        if not isinstance(strategy, (ResolutionStrategy, str)):
            raise TypeError(f"strategy must be a string, got {type(strategy).__name__}")

        if not isinstance(strategy, ResolutionStrategy):
            try:
                strategy = ResolutionStrategy(strategy)
            except ValueError:
                self.logger.warning("Forwarding unrecognized resolution strategy", strategy=strategy)

        token = self.session.require_token()
        response = await self.remote.resolve_conflict(token, conflict_id, strategy)

        self.logger.info(
            "Conflict resolution submitted",
            conflict_id=conflict_id,
            success=response.success,
            message=response.message
        )
        return response
