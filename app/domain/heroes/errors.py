"""
Domain-specific errors for the heroes bounded context.

All errors raised from the domain, application and infrastructure
layers for heroes are defined here. They are mapped to problem
responses at the interface layer.
No framework imports allowed.
"""

from typing import Optional

from app.domain.heroes.entities import FieldError


class HeroDomainError(Exception):
    """Base error for all heroes domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(HeroDomainError):
    """Raised when a hero payload violates one or more field rules."""

    def __init__(self, errors: list[FieldError]) -> None:
        fields = ", ".join(sorted({e.field for e in errors}))
        super().__init__(f"Invalid hero payload: {fields}")
        self.errors = list(errors)


class HeroNotFoundError(HeroDomainError):
    """Raised when no hero exists for the requested id."""

    def __init__(self, hero_id: int) -> None:
        super().__init__(f"Hero not found: {hero_id}")
        self.hero_id = hero_id


class VersionConflictError(HeroDomainError):
    """Raised when the submitted version no longer matches the stored one."""

    def __init__(self, hero_id: int, submitted: int, current: int) -> None:
        super().__init__(
            f"Version conflict for hero {hero_id}: "
            f"submitted {submitted}, current {current}"
        )
        self.hero_id = hero_id
        self.submitted = submitted
        self.current = current


class UniquenessConflictError(HeroDomainError):
    """Raised when a write would duplicate a unique column value."""

    def __init__(self, field: str, value: Optional[str]) -> None:
        super().__init__(f"Hero with {field} '{value}' already exists")
        self.field = field
        self.value = value


class MissingVersionError(HeroDomainError):
    """Raised when an update carries no expected version."""

    def __init__(self, hero_id: int) -> None:
        super().__init__(f"Update of hero {hero_id} requires an expected version")
        self.hero_id = hero_id


class InfrastructureError(HeroDomainError):
    """Base error for transient storage or transport failures."""


class StorageUnavailableError(InfrastructureError):
    """Raised when the database cannot be reached or fails mid-statement."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Storage unavailable during {operation}")
        self.operation = operation
