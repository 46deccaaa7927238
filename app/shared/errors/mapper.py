"""
Error mapper: failures to problem objects.

Pure mapping from any exception to one structured problem shape
(RFC 7807). No IO, no framework response objects. Components downstream
of the mapper only ever see a Problem.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from slowapi.errors import RateLimitExceeded

from app.domain.heroes.entities import FieldError, FieldErrorCode
from app.domain.heroes.errors import (
    HeroNotFoundError,
    InfrastructureError,
    MissingVersionError,
    UniquenessConflictError,
    ValidationError,
    VersionConflictError,
)
from app.shared.errors.exceptions import RequestTimeoutError

PROBLEM_TYPE_BASE = "https://example.com/errors/"
PROBLEM_MEDIA_TYPE = "application/problem+json"
REQUEST_LOCATIONS = ("body", "path", "query", "header")

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_412 = 412
HTTP_428 = 428
HTTP_429 = 429
HTTP_500 = 500
HTTP_503 = 503
HTTP_504 = 504


@dataclass(frozen=True)
class Problem:
    """A uniform problem description for every boundary failure."""

    kind: str
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        return PROBLEM_TYPE_BASE + self.kind

    def to_dict(self) -> dict[str, Any]:
        """Render as an RFC 7807 JSON body."""
        body: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
        }
        if self.detail:
            body["detail"] = self.detail
        if self.instance:
            body["instance"] = self.instance
        body.update(self.extensions)
        return body


def _field_errors(errors: Iterable[FieldError]) -> list[dict[str, str]]:
    return [
        {"field": e.field, "code": e.code.value, "message": e.message}
        for e in errors
    ]


def field_errors_from_request(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert FastAPI/Pydantic request errors into FieldErrors.

    Args:
        errors: Entries as returned by ``RequestValidationError.errors()``.
    """
    result = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        name = loc[0] if loc else "body"
        code = (
            FieldErrorCode.REQUIRED
            if error.get("type") == "missing"
            else FieldErrorCode.INVALID
        )
        message = error.get("msg", "invalid value")
        if len(loc) > 1:
            message = f"{message} (at {'.'.join(loc[1:])})"
        result.append(FieldError(name, code, message))
    return result


def to_problem(exc: Exception, instance: Optional[str] = None) -> Problem:
    """Map any exception to its Problem.

    Args:
        exc: The failure to describe.
        instance: Request path the failure occurred on.

    Returns:
        The problem to render. Unknown exceptions map to a generic 500
        that exposes nothing about the original error.
    """
    if isinstance(exc, ValidationError):
        return Problem(
            kind="validation-error",
            title="Invalid request",
            status=HTTP_400,
            detail="One or more fields failed validation.",
            instance=instance,
            extensions={"errors": _field_errors(exc.errors)},
        )
    if isinstance(exc, HeroNotFoundError):
        return Problem(
            kind="not-found",
            title="Hero not found",
            status=HTTP_404,
            detail=exc.message,
            instance=instance,
            extensions={"hero_id": exc.hero_id},
        )
    if isinstance(exc, VersionConflictError):
        return Problem(
            kind="version-conflict",
            title="Version conflict",
            status=HTTP_412,
            detail="The hero was modified since it was last read. Re-fetch and retry.",
            instance=instance,
            extensions={
                "hero_id": exc.hero_id,
                "submitted_version": exc.submitted,
                "current_version": exc.current,
            },
        )
    if isinstance(exc, UniquenessConflictError):
        return Problem(
            kind="uniqueness-conflict",
            title="Hero name already exists",
            status=HTTP_409,
            detail=exc.message,
            instance=instance,
            extensions={"field": exc.field, "value": exc.value},
        )
    if isinstance(exc, MissingVersionError):
        return Problem(
            kind="precondition-required",
            title="Expected version required",
            status=HTTP_428,
            detail="Send the last observed version in the If-Match header.",
            instance=instance,
        )
    if isinstance(exc, InfrastructureError):
        return Problem(
            kind="storage-unavailable",
            title="Storage unavailable",
            status=HTTP_503,
            instance=instance,
        )
    if isinstance(exc, RequestTimeoutError):
        return Problem(
            kind="request-timeout",
            title="Request timed out",
            status=HTTP_504,
            instance=instance,
        )
    if isinstance(exc, RateLimitExceeded):
        return Problem(
            kind="rate-limit-exceeded",
            title="Rate limit exceeded",
            status=HTTP_429,
            detail=str(exc.detail),
            instance=instance,
        )
    return Problem(
        kind="internal-error",
        title="Internal Server Error",
        status=HTTP_500,
        instance=instance,
    )
