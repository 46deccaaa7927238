"""
Database engine construction.

One Engine (and therefore one connection pool) is built per application
instance by the composition root and handed to adapters explicitly.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

logger = logging.getLogger(__name__)


def build_engine(database_url: str, pool_size: int = 5) -> Engine:
    """Build a SQLAlchemy engine for the given DSN.

    Args:
        database_url: SQLAlchemy-compatible database URL.
        pool_size: Maximum number of pooled connections (server databases only).

    Returns:
        A configured Engine with pre-ping enabled.
    """
    url = make_url(database_url)
    kwargs: dict = {"pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = pool_size
    logger.info("Creating database engine for %s", url.render_as_string(hide_password=True))
    return create_engine(url, **kwargs)


def create_schema(engine: Engine) -> None:
    """Create the heroes table if it does not exist.

    Production databases get their schema from db/migrations; this is the
    bootstrap path for local development and tests.
    """
    from app.infrastructure.heroes.tables import metadata

    metadata.create_all(engine)
    logger.info("Hero schema ensured.")
