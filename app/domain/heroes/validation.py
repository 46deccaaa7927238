"""
Hero payload validation.

Rules are an explicit ordered list of pure functions. Each rule looks at
one field of the raw payload and returns zero or more FieldErrors.
All rules always run, so a single ValidationError reports every problem.

Input: a JSON-like mapping (already stripped of server-managed fields).
Output: NewHero / HeroChanges, or ValidationError.
Side effects: None.
"""

from collections.abc import Callable, Mapping
from typing import Any

from app.domain.heroes.entities import FieldError, FieldErrorCode, HeroChanges, NewHero
from app.domain.heroes.errors import ValidationError

MAX_TEXT_LENGTH = 255
MAX_ABILITIES = 5

Rule = Callable[[Mapping[str, Any], bool], list[FieldError]]


def _required(field: str) -> FieldError:
    return FieldError(field, FieldErrorCode.REQUIRED, f"{field} is required")


def _too_long(field: str) -> FieldError:
    return FieldError(
        field,
        FieldErrorCode.TOO_LONG,
        f"{field} must be at most {MAX_TEXT_LENGTH} characters",
    )


def _invalid(field: str, message: str) -> FieldError:
    return FieldError(field, FieldErrorCode.INVALID, message)


def check_name(payload: Mapping[str, Any], partial: bool) -> list[FieldError]:
    """name: required, trimmed non-empty, bounded length."""
    if "name" not in payload:
        return [] if partial else [_required("name")]
    value = payload["name"]
    if value is None:
        return [_required("name")]
    if not isinstance(value, str):
        return [_invalid("name", "name must be text")]
    if not value.strip():
        return [_required("name")]
    if len(value.strip()) > MAX_TEXT_LENGTH:
        return [_too_long("name")]
    return []


def check_abilities(payload: Mapping[str, Any], partial: bool) -> list[FieldError]:
    """abilities: present list of at most MAX_ABILITIES non-empty texts."""
    if "abilities" not in payload:
        return [] if partial else [_required("abilities")]
    value = payload["abilities"]
    if value is None:
        return [_required("abilities")]
    if not isinstance(value, (list, tuple)):
        return [_invalid("abilities", "abilities must be a list of text entries")]

    errors: list[FieldError] = []
    if len(value) > MAX_ABILITIES:
        errors.append(
            FieldError(
                "abilities",
                FieldErrorCode.TOO_LONG,
                f"at most {MAX_ABILITIES} abilities are allowed",
            )
        )
    blank = [
        i for i, entry in enumerate(value)
        if not isinstance(entry, str) or not entry.strip()
    ]
    if blank:
        indices = ", ".join(str(i) for i in blank)
        errors.append(
            _invalid("abilities", f"abilities entries must be non-empty text (indices: {indices})")
        )
    oversized = [
        i for i, entry in enumerate(value)
        if isinstance(entry, str) and len(entry.strip()) > MAX_TEXT_LENGTH
    ]
    if oversized:
        indices = ", ".join(str(i) for i in oversized)
        errors.append(
            FieldError(
                "abilities",
                FieldErrorCode.TOO_LONG,
                f"abilities entries must be at most {MAX_TEXT_LENGTH} characters (indices: {indices})",
            )
        )
    return errors


def check_real_name(payload: Mapping[str, Any], partial: bool) -> list[FieldError]:
    """real_name: optional; when given, non-empty after trimming."""
    value = payload.get("real_name")
    if value is None:
        return []
    if not isinstance(value, str):
        return [_invalid("real_name", "real_name must be text")]
    if not value.strip():
        return [_invalid("real_name", "real_name must not be blank when present")]
    if len(value.strip()) > MAX_TEXT_LENGTH:
        return [_too_long("real_name")]
    return []


def check_can_fly(payload: Mapping[str, Any], partial: bool) -> list[FieldError]:
    """can_fly: any boolean. Absent means false on create."""
    if "can_fly" not in payload:
        return []
    value = payload["can_fly"]
    if value is None:
        # null means "default" on create only
        return [_invalid("can_fly", "can_fly must be a boolean")] if partial else []
    if not isinstance(value, bool):
        return [_invalid("can_fly", "can_fly must be a boolean")]
    return []


RULES: tuple[Rule, ...] = (
    check_name,
    check_can_fly,
    check_real_name,
    check_abilities,
)


def collect_errors(payload: Mapping[str, Any], partial: bool = False) -> list[FieldError]:
    """Run every rule and return all violations in rule order."""
    errors: list[FieldError] = []
    for rule in RULES:
        errors.extend(rule(payload, partial))
    return errors


def _clean_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def validate_new_hero(payload: Mapping[str, Any]) -> NewHero:
    """Validate a create payload.

    Raises:
        ValidationError: Carrying every violated rule.
    """
    errors = collect_errors(payload, partial=False)
    if errors:
        raise ValidationError(errors)

    return NewHero(
        name=payload["name"].strip(),
        abilities=tuple(a.strip() for a in payload["abilities"]),
        can_fly=bool(payload.get("can_fly") or False),
        real_name=_clean_text(payload.get("real_name")),
    )


def validate_hero_changes(payload: Mapping[str, Any]) -> HeroChanges:
    """Validate a partial update payload. Absent fields are left alone.

    Raises:
        ValidationError: Carrying every violated rule.
    """
    errors = collect_errors(payload, partial=True)
    if errors:
        raise ValidationError(errors)

    values: dict[str, Any] = {}
    if "name" in payload:
        values["name"] = payload["name"].strip()
    if "can_fly" in payload:
        values["can_fly"] = payload["can_fly"]
    if "real_name" in payload:
        values["real_name"] = _clean_text(payload["real_name"])
    if "abilities" in payload:
        values["abilities"] = tuple(a.strip() for a in payload["abilities"])
    return HeroChanges(values=values)
