"""
Adapter: Hero repository.

Implements HeroRepository port on top of a SQLAlchemy Engine.
Responsible for persisting and retrieving heroes and for the
version-gated update protocol.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, exc as sa_exc, insert, select, text, update
from sqlalchemy.engine import Engine, Row

from app.domain.heroes.entities import INITIAL_VERSION, Hero, HeroChanges, NewHero
from app.domain.heroes.errors import (
    HeroNotFoundError,
    StorageUnavailableError,
    UniquenessConflictError,
    VersionConflictError,
)
from app.domain.heroes.ports import HeroRepository
from app.infrastructure.heroes.tables import heroes

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: sa_exc.IntegrityError) -> bool:
    """Tell a unique-constraint violation apart from other integrity errors."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE" in str(orig).upper()


@contextmanager
def _storage_errors(operation: str, name: Optional[str] = None) -> Iterator[None]:
    """Translate driver failures into domain errors.

    Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except sa_exc.IntegrityError as exc:
        if _is_unique_violation(exc):
            logger.warning("Unique constraint violated during %s", operation)
            raise UniquenessConflictError("name", name) from exc
        logger.error("Failed to execute SQL statement during %s: %s", operation, exc)
        raise
    except (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError) as exc:
        logger.error("Failed to execute SQL statement during %s: %s", operation, exc)
        raise StorageUnavailableError(operation) from exc


def _to_entity(row: Row) -> Hero:
    """Map a heroes row to the Hero entity."""
    data = row._mapping
    return Hero(
        id=data["id"],
        first_seen=data["first_seen"],
        name=data["name"],
        can_fly=data["can_fly"],
        real_name=data["real_name"],
        abilities=tuple(data["abilities"] or ()),
        version=data["version"],
    )


class HeroRepositoryAdapter(HeroRepository):
    """SQL implementation of the hero repository.

    Every public method borrows one pooled connection for the duration
    of a single transaction and returns it on every exit path.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, hero: NewHero) -> Hero:
        """Insert a new hero.

        Args:
            hero: Validated create payload.

        Returns:
            The stored hero with id, first_seen and version 1.
        """
        stmt = insert(heroes).values(
            first_seen=datetime.now(timezone.utc),
            name=hero.name,
            can_fly=hero.can_fly,
            real_name=hero.real_name,
            abilities=list(hero.abilities),
            version=INITIAL_VERSION,
        )
        with _storage_errors("create", hero.name):
            with self._engine.begin() as conn:
                hero_id = conn.execute(stmt).inserted_primary_key[0]
                row = conn.execute(select(heroes).where(heroes.c.id == hero_id)).one()

        logger.info("Created hero id=%s", hero_id)
        return _to_entity(row)

    def get_by_id(self, hero_id: int) -> Hero:
        """Return a hero by id or raise HeroNotFoundError."""
        with _storage_errors("get"):
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(heroes).where(heroes.c.id == hero_id)
                ).one_or_none()

        if row is None:
            raise HeroNotFoundError(hero_id)
        return _to_entity(row)

    def update(
        self, hero_id: int, expected_version: int, changes: HeroChanges
    ) -> Hero:
        """Apply changes with a single version-gated UPDATE.

        The UPDATE matches on both id and version. Only when it touches no
        row is the current version read back, to tell a missing hero from
        a stale version.

        Args:
            hero_id: Hero to update.
            expected_version: Version the client last observed.
            changes: Validated subset of fields to overwrite.

        Returns:
            The refreshed hero, carrying ``expected_version + 1``.
        """
        values = dict(changes.values)
        if "abilities" in values:
            values["abilities"] = list(values["abilities"])

        stmt = (
            update(heroes)
            .where(heroes.c.id == hero_id, heroes.c.version == expected_version)
            .values(**values, version=heroes.c.version + 1)
        )
        with _storage_errors("update", values.get("name")):
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    current = conn.execute(
                        select(heroes.c.version).where(heroes.c.id == hero_id)
                    ).scalar_one_or_none()
                    if current is None:
                        raise HeroNotFoundError(hero_id)
                    logger.info(
                        "Version conflict on hero id=%s: submitted=%d current=%d",
                        hero_id,
                        expected_version,
                        current,
                    )
                    raise VersionConflictError(hero_id, expected_version, current)
                row = conn.execute(select(heroes).where(heroes.c.id == hero_id)).one()

        logger.info("Updated hero id=%s to version=%d", hero_id, expected_version + 1)
        return _to_entity(row)

    def delete(self, hero_id: int) -> None:
        """Hard-delete a hero by id."""
        with _storage_errors("delete"):
            with self._engine.begin() as conn:
                result = conn.execute(delete(heroes).where(heroes.c.id == hero_id))
                if result.rowcount == 0:
                    raise HeroNotFoundError(hero_id)

        logger.info("Deleted hero id=%s", hero_id)

    def delete_all(self) -> int:
        """Remove every hero. Ids already issued are not handed out again."""
        with _storage_errors("cleanup"):
            with self._engine.begin() as conn:
                removed = conn.execute(delete(heroes)).rowcount

        logger.info("Removed %d heroes", removed)
        return removed

    def ping(self) -> None:
        """Run a trivial statement to prove the store is reachable."""
        with _storage_errors("ping"):
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))

    def list(self) -> list[Hero]:
        """Return all heroes ordered by id ascending."""
        with _storage_errors("list"):
            with self._engine.connect() as conn:
                rows = conn.execute(select(heroes).order_by(heroes.c.id)).fetchall()

        return [_to_entity(row) for row in rows]
