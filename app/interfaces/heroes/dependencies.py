"""
Dependency injection for the heroes bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into the service via constructor injection.
The engine is owned by the application instance, never by this module.
"""

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from app.application.heroes.hero_service import HeroService
from app.domain.heroes.ports import HeroRepository
from app.infrastructure.heroes.hero_repository import HeroRepositoryAdapter


def get_engine(request: Request) -> Engine:
    """Return the engine built by the application factory."""
    return request.app.state.engine


def get_hero_repository(engine: Engine = Depends(get_engine)) -> HeroRepository:
    """Build the SQL hero repository over the shared connection pool."""
    return HeroRepositoryAdapter(engine)


def get_hero_service(
    repository: HeroRepository = Depends(get_hero_repository),
) -> HeroService:
    """Build HeroService with its infrastructure dependencies."""
    return HeroService(repository)
