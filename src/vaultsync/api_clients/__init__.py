"""API clients package for the remote authority."""

from .base import BaseAPIClient
from .models import (
    AuthResponse,
    ClientData,
    Conflict,
    RegisterResponse,
    ResolutionResponse,
    ResolutionStrategy,
    SyncResponse,
    TokenValidation
)
from .remote import RemoteAuthorityClient

__all__ = [
    # Base client
    "BaseAPIClient",

    # Wire models
    "AuthResponse",
    "ClientData",
    "Conflict",
    "RegisterResponse",
    "ResolutionResponse",
    "ResolutionStrategy",
    "SyncResponse",
    "TokenValidation",

    # Client implementations
    "RemoteAuthorityClient"
]
