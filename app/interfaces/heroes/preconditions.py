"""
Parsing of the expected-version precondition for updates.

Clients echo the version they last read, preferably as a strong entity
tag in If-Match (``"3"`` or a bare ``3``), otherwise as a ``version``
member of the body. Weak tags (``W/"3"``) are rejected.
"""

from typing import Optional

from app.domain.heroes.entities import MAX_KEY, FieldError, FieldErrorCode
from app.domain.heroes.errors import MissingVersionError, ValidationError

IF_MATCH = "If-Match"


def _invalid_if_match() -> ValidationError:
    return ValidationError([
        FieldError(
            IF_MATCH,
            FieldErrorCode.INVALID,
            'If-Match must carry a single strong version tag such as "1"',
        )
    ])


def parse_if_match(value: Optional[str]) -> Optional[int]:
    """Extract the version number from an If-Match header value.

    Returns:
        The version, or None when the header is absent or empty.

    Raises:
        ValidationError: If the value is not a single strong tag holding
            a version between 1 and MAX_KEY.
    """
    if value is None or not value.strip():
        return None

    token = value.strip()
    if token.startswith('"') and token.endswith('"') and len(token) >= 2:
        token = token[1:-1]
    if not token.isdecimal() or not 1 <= int(token) <= MAX_KEY:
        raise _invalid_if_match()
    return int(token)


def resolve_expected_version(
    hero_id: int, if_match: Optional[str], body_version: Optional[int]
) -> int:
    """Pick the expected version, header first.

    Raises:
        MissingVersionError: If neither source carries a version.
    """
    version = parse_if_match(if_match)
    if version is None:
        version = body_version
    if version is None:
        raise MissingVersionError(hero_id)
    return version
