"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses through the error mapper.
No stack traces or internal details are exposed to clients.
All error responses use the problem object shape.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.domain.heroes.errors import HeroDomainError, ValidationError
from app.shared.errors.mapper import (
    PROBLEM_MEDIA_TYPE,
    Problem,
    field_errors_from_request,
    to_problem,
)
from app.shared.security.headers import SECURE_HEADERS

logger = logging.getLogger(__name__)


def problem_response(problem: Problem) -> JSONResponse:
    """Build a consistent problem+json response."""
    return JSONResponse(
        status_code=problem.status,
        content=problem.to_dict(),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(HeroDomainError)
    async def handle_hero_domain(
        request: Request, exc: HeroDomainError
    ) -> JSONResponse:
        """Handle every error of the heroes bounded context."""
        problem = to_problem(exc, instance=request.url.path)
        if problem.status >= 500:
            logger.error("Hero request failed: %s", exc.message)
        else:
            logger.warning("Hero request rejected (%d): %s", problem.status, exc.message)
        return problem_response(problem)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed bodies and wrongly typed fields."""
        errors = field_errors_from_request(exc.errors())
        logger.warning("Malformed request on %s: %d field errors", request.url.path, len(errors))
        return problem_response(
            to_problem(ValidationError(errors), instance=request.url.path)
        )

    @app.exception_handler(RateLimitExceeded)
    def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        """Handle slowapi rejections. Sync so SlowAPIMiddleware can call it."""
        logger.warning("Rate limit exceeded on %s", request.url.path)
        return problem_response(to_problem(exc, instance=request.url.path))

    @app.exception_handler(Exception)
    async def handle_unexpected(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals.

        Starlette renders this response outside the middleware stack, so
        the secure headers are set here.
        """
        logger.exception("Unexpected error: %s", type(exc).__name__)
        response = problem_response(to_problem(exc, instance=request.url.path))
        response.headers.update(SECURE_HEADERS)
        return response
