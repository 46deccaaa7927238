"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status, version, environment
and whether the database answers.
"""

import logging

from fastapi import APIRouter, Depends, Request

from app.domain.heroes.errors import InfrastructureError
from app.domain.heroes.ports import HeroRepository
from app.interfaces.heroes.dependencies import get_hero_repository
from app.interfaces.heroes.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and database reachability.",
)
def health_check(
    request: Request,
    repository: HeroRepository = Depends(get_hero_repository),
) -> HealthResponse:
    """Return current application health status."""
    settings = request.app.state.settings
    try:
        repository.ping()
        database = "ok"
    except InfrastructureError:
        logger.warning("Health check: database unreachable")
        database = "unavailable"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=settings.version,
        env=settings.environment.value,
        database=database,
    )
