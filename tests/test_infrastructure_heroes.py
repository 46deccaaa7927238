"""
Tests for HeroRepositoryAdapter against a real SQLite database.

Covers the version-gated update protocol, uniqueness enforcement,
hard deletes and translation of driver failures.
"""

import threading
from datetime import datetime

import pytest
from sqlalchemy import func, select

from app.domain.heroes.entities import HeroChanges, NewHero
from app.domain.heroes.errors import (
    HeroNotFoundError,
    StorageUnavailableError,
    UniquenessConflictError,
    VersionConflictError,
)
from app.infrastructure.database import build_engine
from app.infrastructure.heroes.hero_repository import HeroRepositoryAdapter
from app.infrastructure.heroes.tables import heroes


def _nightglow() -> NewHero:
    return NewHero(
        name="Nightglow",
        abilities=("flight", "night-vision"),
        can_fly=True,
    )


def _row_count(engine) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(heroes)).scalar_one()


class TestCreate:
    """Tests for HeroRepositoryAdapter.create."""

    def test_assigns_id_version_and_first_seen(self, repository) -> None:
        hero = repository.create(_nightglow())
        assert hero.id == 1
        assert hero.version == 1
        assert isinstance(hero.first_seen, datetime)
        assert hero.abilities == ("flight", "night-vision")
        assert hero.can_fly is True
        assert hero.real_name is None

    def test_create_then_get_preserves_fields(self, repository) -> None:
        created = repository.create(
            NewHero(name="Quill", abilities=(), can_fly=False, real_name="Ada")
        )
        fetched = repository.get_by_id(created.id)
        assert fetched == created
        assert fetched.version == 1

    def test_duplicate_name_conflicts_without_insert(self, repository, engine) -> None:
        repository.create(_nightglow())
        with pytest.raises(UniquenessConflictError) as exc_info:
            repository.create(NewHero(name="Nightglow", abilities=()))
        assert exc_info.value.field == "name"
        assert exc_info.value.value == "Nightglow"
        assert _row_count(engine) == 1

    def test_ids_are_never_reused(self, repository) -> None:
        first = repository.create(_nightglow())
        repository.delete(first.id)
        second = repository.create(NewHero(name="Quill", abilities=()))
        assert second.id > first.id


class TestRead:
    """Tests for get_by_id and list."""

    def test_get_missing_raises(self, repository) -> None:
        with pytest.raises(HeroNotFoundError) as exc_info:
            repository.get_by_id(404)
        assert exc_info.value.hero_id == 404

    def test_list_orders_by_id(self, repository) -> None:
        for name in ("Zed", "Amber", "Moth"):
            repository.create(NewHero(name=name, abilities=()))
        assert [h.name for h in repository.list()] == ["Zed", "Amber", "Moth"]

    def test_list_empty(self, repository) -> None:
        assert repository.list() == []


class TestUpdate:
    """Tests for the version-gated update."""

    def test_matching_version_applies_and_bumps(self, repository) -> None:
        hero = repository.create(_nightglow())
        updated = repository.update(hero.id, 1, HeroChanges({"can_fly": False}))
        assert updated.version == 2
        assert updated.can_fly is False
        assert updated.name == "Nightglow"
        assert updated.abilities == hero.abilities
        assert updated.first_seen == hero.first_seen

    def test_stale_version_conflicts_and_leaves_row(self, repository) -> None:
        hero = repository.create(_nightglow())
        repository.update(hero.id, 1, HeroChanges({"can_fly": False}))

        with pytest.raises(VersionConflictError) as exc_info:
            repository.update(hero.id, 1, HeroChanges({"name": "Dayglow"}))

        assert exc_info.value.submitted == 1
        assert exc_info.value.current == 2
        stored = repository.get_by_id(hero.id)
        assert stored.name == "Nightglow"
        assert stored.version == 2

    def test_future_version_conflicts(self, repository) -> None:
        hero = repository.create(_nightglow())
        with pytest.raises(VersionConflictError) as exc_info:
            repository.update(hero.id, 5, HeroChanges({"can_fly": False}))
        assert exc_info.value.current == 1

    def test_missing_hero_is_not_found(self, repository) -> None:
        with pytest.raises(HeroNotFoundError):
            repository.update(99, 1, HeroChanges({"can_fly": False}))

    def test_empty_changes_still_bump_version(self, repository) -> None:
        hero = repository.create(_nightglow())
        assert repository.update(hero.id, 1, HeroChanges()).version == 2

    def test_version_increments_by_one_each_time(self, repository) -> None:
        hero = repository.create(_nightglow())
        for expected in range(1, 5):
            hero = repository.update(hero.id, expected, HeroChanges({"can_fly": expected % 2 == 0}))
            assert hero.version == expected + 1

    def test_abilities_replaced_in_order(self, repository) -> None:
        hero = repository.create(_nightglow())
        updated = repository.update(
            hero.id, 1, HeroChanges({"abilities": ("x-ray", "flight")})
        )
        assert updated.abilities == ("x-ray", "flight")

    def test_rename_to_taken_name_conflicts_atomically(self, repository) -> None:
        repository.create(NewHero(name="Quill", abilities=()))
        hero = repository.create(_nightglow())

        with pytest.raises(UniquenessConflictError):
            repository.update(
                hero.id, 1, HeroChanges({"name": "Quill", "can_fly": False})
            )

        stored = repository.get_by_id(hero.id)
        assert stored.version == 1
        assert stored.can_fly is True

    def test_concurrent_updates_exactly_one_wins(self, repository) -> None:
        hero = repository.create(_nightglow())
        workers = 8
        barrier = threading.Barrier(workers)
        outcomes: list[object] = []
        lock = threading.Lock()

        def attempt(n: int) -> None:
            barrier.wait()
            try:
                result = repository.update(hero.id, 1, HeroChanges({"real_name": f"writer-{n}"}))
            except VersionConflictError as exc:
                result = exc
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt, args=(n,)) for n in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        conflicts = [o for o in outcomes if isinstance(o, VersionConflictError)]
        winners = [o for o in outcomes if not isinstance(o, VersionConflictError)]
        assert len(outcomes) == workers
        assert len(winners) == 1
        assert len(conflicts) == workers - 1
        assert all(c.current == 2 for c in conflicts)

        stored = repository.get_by_id(hero.id)
        assert stored.version == 2
        assert stored.real_name == winners[0].real_name


class TestDelete:
    """Tests for delete and delete_all."""

    def test_delete_removes_row(self, repository) -> None:
        hero = repository.create(_nightglow())
        repository.delete(hero.id)
        with pytest.raises(HeroNotFoundError):
            repository.get_by_id(hero.id)

    def test_delete_missing_has_no_effect(self, repository, engine) -> None:
        repository.create(_nightglow())
        with pytest.raises(HeroNotFoundError):
            repository.delete(12345)
        assert _row_count(engine) == 1

    def test_delete_all_returns_count(self, repository, engine) -> None:
        repository.create(_nightglow())
        repository.create(NewHero(name="Quill", abilities=()))
        assert repository.delete_all() == 2
        assert _row_count(engine) == 0


class TestStorageFailures:
    """Driver failures surface as StorageUnavailableError."""

    @pytest.fixture
    def broken_repository(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'heroes.db'}")
        yield HeroRepositoryAdapter(engine)
        engine.dispose()

    def test_ping_fails(self, broken_repository) -> None:
        with pytest.raises(StorageUnavailableError) as exc_info:
            broken_repository.ping()
        assert exc_info.value.operation == "ping"

    def test_list_fails(self, broken_repository) -> None:
        with pytest.raises(StorageUnavailableError):
            broken_repository.list()

    def test_ping_succeeds(self, repository) -> None:
        repository.ping()
