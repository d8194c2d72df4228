"""Wire models for the remote authority API."""

import base64
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from ..storage.models import Entry


class ResolutionStrategy(str, Enum):
    """How the remote authority should settle a conflict."""

    USE_CLIENT = "client"
    USE_SERVER = "server"
    MERGE = "merge"


class ClientData(BaseModel):
    """An entry as submitted in a sync batch."""

    id: str
    type: str
    data: str = Field(description="Base64 encoded payload")
    updated_at: int

    @classmethod
    def from_entry(cls, entry: Entry) -> "ClientData":
        return cls(
            id=entry.id,
            type=entry.type.label,
            data=base64.b64encode(entry.payload).decode("ascii"),
            updated_at=entry.updated_at,
        )


class Conflict(BaseModel):
    """A divergence reported by the remote authority."""

    conflict_id: str
    data_id: str


class SyncResponse(BaseModel):
    success: bool = False
    conflicts: List[Conflict] = Field(default_factory=list)

    @field_validator("conflicts", mode="before")
    @classmethod
    def _null_conflicts(cls, value: Any) -> Any:
        return [] if value is None else value


class ResolutionResponse(BaseModel):
    success: bool = False
    message: str = ""


class TokenValidation(BaseModel):
    valid: bool = False
    user_id: str = ""

    @field_validator("user_id", mode="before")
    @classmethod
    def _null_user_id(cls, value: Any) -> Any:
        return "" if value is None else value


class AuthResponse(BaseModel):
    access_token: str = ""
    refresh_token: str = ""
    expires_in: str = ""

    @field_validator("access_token", "refresh_token", "expires_in", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value


class RegisterResponse(BaseModel):
    user_id: str = ""
    message: str = ""
