"""
Domain entities for the heroes bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

INITIAL_VERSION = 1
# ids and versions are stored as signed 64-bit integers
MAX_KEY = 2**63 - 1


class FieldErrorCode(Enum):
    """Machine-readable reason attached to a single field violation."""

    REQUIRED = "FieldRequired"
    TOO_LONG = "FieldTooLong"
    INVALID = "FieldInvalid"


@dataclass(frozen=True)
class FieldError:
    """A single rule violation on one payload field."""

    field: str
    code: FieldErrorCode
    message: str


@dataclass(frozen=True)
class Hero:
    """A persisted hero record.

    ``version`` starts at 1 and grows by exactly one per successful
    update. It is the only concurrency token clients may echo back.
    """

    id: int
    first_seen: datetime
    name: str
    can_fly: bool
    real_name: Optional[str]
    abilities: tuple[str, ...]
    version: int

    @property
    def etag(self) -> str:
        """Strong entity tag derived from the version token."""
        return f'"{self.version}"'


@dataclass(frozen=True)
class NewHero:
    """A validated create payload. Server-managed fields are absent."""

    name: str
    abilities: tuple[str, ...]
    can_fly: bool = False
    real_name: Optional[str] = None


@dataclass(frozen=True)
class HeroChanges:
    """A validated partial update.

    Only the fields the client submitted are present in ``values``;
    everything else stays as stored.
    """

    values: dict[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.values
