"""
Shared fixtures: a fresh file-backed SQLite store per test.

File-backed (not in-memory) so that several threads can hold their own
pooled connections, which the concurrent update tests rely on.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Environment, Settings
from app.infrastructure.database import build_engine, create_schema
from app.infrastructure.heroes.hero_repository import HeroRepositoryAdapter
from app.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'heroes.db'}"


@pytest.fixture
def engine(database_url):
    engine = build_engine(database_url)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine) -> HeroRepositoryAdapter:
    return HeroRepositoryAdapter(engine)


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(
        environment=Environment.TEST,
        database_url=database_url,
        rate_limit_enabled=False,
        version="1.0.0",
    )


@pytest.fixture
def client(settings, engine) -> TestClient:
    return TestClient(create_app(settings, engine))
