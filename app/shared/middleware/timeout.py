"""
Request timeout middleware.

Bounds the time any single request may spend in the application.
Timed-out requests get a 504 problem response. Nothing is retried.
"""

import asyncio
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.shared.errors.exceptions import RequestTimeoutError
from app.shared.errors.handlers import problem_response
from app.shared.errors.mapper import to_problem

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """ASGI middleware that cancels requests running past a fixed budget.

    Synchronous endpoints run in a worker thread that cannot be
    interrupted; their cancellation takes effect once the thread returns.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        self.app = app
        self._timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), self._timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(
                "Request %s %s exceeded %.1fs",
                scope.get("method"),
                scope.get("path"),
                self._timeout_seconds,
            )
            if response_started:
                raise
            problem = to_problem(
                RequestTimeoutError(self._timeout_seconds), instance=scope.get("path")
            )
            await problem_response(problem)(scope, receive, send)
