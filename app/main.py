"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-problem mapping)
- Security middleware (headers, rate limiting, request timeout)
- Logging configuration
- The database engine (one connection pool per application instance)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.engine import Engine

from app.core.config import Settings, get_settings
from app.infrastructure.database import build_engine, create_schema
from app.interfaces.health import router as health_router
from app.interfaces.heroes.router import router as heroes_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.middleware.timeout import RequestTimeoutMiddleware
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import build_limiter

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare and release the database engine."""
    settings: Settings = app.state.settings
    if settings.auto_create_schema:
        create_schema(app.state.engine)
    logger.info(
        "%s %s started (env=%s)",
        settings.project_name,
        settings.version,
        settings.environment.value,
    )

    yield

    # Shutdown
    app.state.engine.dispose()
    logger.info("Database engine disposed.")


def create_app(
    settings: Optional[Settings] = None, engine: Optional[Engine] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        settings: Configuration to use. Read from the environment if omitted.
        engine: Database engine to use. Built from settings if omitted.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, sql_echo=settings.debug)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine or build_engine(
        settings.get_database_url(), pool_size=settings.db_pool_size
    )

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(
        settings.rate_limit_default, enabled=settings.rate_limit_enabled
    )
    app.add_middleware(SlowAPIMiddleware)

    # --- Request Timeout ---
    app.add_middleware(
        RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds
    )

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(heroes_router, prefix=API_PREFIX)

    return app


app = create_app()
