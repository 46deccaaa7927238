"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-client rate limits.
Protects against denial-of-service and resource abuse.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

DEFAULT_RATE_LIMIT = "60/minute"


def build_limiter(
    default_limit: str = DEFAULT_RATE_LIMIT, enabled: bool = True
) -> Limiter:
    """Create a limiter keyed on the client address.

    Args:
        default_limit: Limit applied to every route, e.g. "60/minute".
        enabled: When False the limiter lets everything through.

    Returns:
        A Limiter with its own in-memory counters.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[default_limit],
        enabled=enabled,
    )
