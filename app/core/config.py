"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment the service runs in."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: Deployment environment (development, test, production).
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: Full SQLAlchemy DSN. Built from postgres_* when unset.
        db_pool_size: Maximum pooled database connections.
        auto_create_schema: Create the heroes table on startup (dev/test only).
        request_timeout_seconds: Upper bound on a single request.
        rate_limit_enabled: Toggle for the slowapi limiter.
        rate_limit_default: Default rate limit for all endpoints.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Hero Manager"
    version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"
    request_timeout_seconds: float = 10.0
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"

    database_url: Optional[str] = None
    db_pool_size: int = 5
    auto_create_schema: bool = False
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "heroes"

    def get_database_url(self) -> str:
        """Return the effective database DSN.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()


settings = get_settings()
