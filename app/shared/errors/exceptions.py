"""
Boundary-level errors that do not belong to any bounded context.
"""


class RequestTimeoutError(Exception):
    """Raised when a request exceeds the configured time budget."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Request exceeded {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds
