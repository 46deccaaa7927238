"""
Pydantic schemas for hero API request/response validation.

These schemas define the API contract and check JSON types only.
Field rules (required, non-empty, length) live in the domain
validation module so that every violation is reported at once.
No business logic belongs here.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, field_validator

from app.domain.heroes.entities import MAX_KEY, Hero


class HeroPayload(BaseModel):
    """Client-editable hero fields.

    Every field is optional at this level; which ones are required
    depends on the use case. Server-managed fields sent by clients
    (id, first_seen) are ignored. camelCase names are accepted too.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[Any] = Field(default=None, description="Unique public hero name")
    can_fly: Optional[StrictBool] = Field(
        default=None,
        validation_alias=AliasChoices("can_fly", "canFly"),
        description="Whether the hero can fly (defaults to false)",
    )
    real_name: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices("real_name", "realName", "realname"),
        description="Secret identity",
    )
    abilities: Optional[list[Any]] = Field(
        default=None,
        description="Ordered abilities; a comma-separated string is split",
    )

    @field_validator("abilities", mode="before")
    @classmethod
    def split_comma_separated(cls, value: Any) -> Any:
        """Accept "flight, night-vision" as well as a JSON list."""
        if isinstance(value, str):
            return [part.strip() for part in value.split(",")]
        return value

    def to_payload(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude={"version"})


class HeroCreateRequest(HeroPayload):
    """Request schema for creating a hero."""


class HeroUpdateRequest(HeroPayload):
    """Request schema for a partial or full hero update.

    Attributes:
        version: Fallback for clients that cannot send If-Match.
    """

    version: Optional[int] = Field(
        default=None, ge=1, le=MAX_KEY, description="Last observed version (If-Match preferred)"
    )


class HeroResponse(BaseModel):
    """A hero as returned by the API."""

    id: int
    first_seen: datetime
    name: str
    can_fly: bool
    real_name: Optional[str]
    abilities: list[str]
    version: int

    @classmethod
    def from_entity(cls, hero: Hero) -> "HeroResponse":
        return cls(
            id=hero.id,
            first_seen=hero.first_seen,
            name=hero.name,
            can_fly=hero.can_fly,
            real_name=hero.real_name,
            abilities=list(hero.abilities),
            version=hero.version,
        )


class ProblemResponse(BaseModel):
    """Problem object returned for every failure (RFC 7807).

    Extension members (errors, submitted_version, current_version,
    hero_id, field, value) appear depending on the problem type.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    env: str
    database: str
