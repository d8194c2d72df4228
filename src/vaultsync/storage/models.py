"""Local entry models."""

import base64
import binascii
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict


def as_int(value: Any, field: str) -> int:
    """Read a JSON number as an integer.

    Raises:
        ValueError: If the value is a bool, a non-integral float or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field} must be an integer, got {value!r}")
    return int(value)


class DataType(IntEnum):
    """Categories of stored secrets. Persisted as integers."""

    LOGIN = 0
    NOTE = 1
    CARD = 2
    BINARY = 3

    @property
    def label(self) -> str:
        """Lowercase name used on the wire."""
        return self.name.lower()

    @classmethod
    def from_label(cls, value: str) -> "DataType":
        """Parse a type name case-insensitively.

        Raises:
            ValueError: If the name is not a known type
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown data type: {value!r}") from None


@dataclass
class Entry:
    """A single secret record.

    ``payload`` is opaque to this client; callers encrypt it before storing.
    """

    id: str
    type: DataType
    payload: bytes
    created_at: int
    updated_at: int

    def __post_init__(self):
        self.type = DataType(self.type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk record layout."""
        return {
            "ID": self.id,
            "Type": int(self.type),
            "Data": base64.b64encode(self.payload).decode("ascii"),
            "CreatedAt": self.created_at,
            "UpdatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        """Build an entry from the on-disk record layout.

        Raises:
            ValueError: If a field is missing or malformed
        """
        try:
            raw = data.get("Data") or ""
            return cls(
                id=str(data["ID"]),
                type=DataType(as_int(data["Type"], "Type")),
                payload=base64.b64decode(raw, validate=True),
                created_at=as_int(data["CreatedAt"], "CreatedAt"),
                updated_at=as_int(data["UpdatedAt"], "UpdatedAt"),
            )
        except (AttributeError, KeyError, TypeError, binascii.Error) as e:
            raise ValueError(f"malformed entry record: {e}") from e
