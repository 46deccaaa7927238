"""
Port interfaces (ABCs) for the heroes bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod

from app.domain.heroes.entities import Hero, HeroChanges, NewHero


class HeroRepository(ABC):
    """Port for persisting and retrieving heroes.

    The repository is the only component allowed to touch the stored
    representation. Every method may block on IO.
    """

    @abstractmethod
    def create(self, hero: NewHero) -> Hero:
        """Insert a hero with version 1 and server-assigned id/first_seen.

        Raises:
            UniquenessConflictError: If the name is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, hero_id: int) -> Hero:
        """Return the hero with the given id.

        Raises:
            HeroNotFoundError: If no such hero exists.
        """
        raise NotImplementedError

    @abstractmethod
    def list(self) -> list[Hero]:
        """Return all heroes ordered by id ascending."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, hero_id: int, expected_version: int, changes: HeroChanges
    ) -> Hero:
        """Apply changes only if the stored version equals expected_version.

        On success the stored version becomes ``expected_version + 1``.

        Raises:
            HeroNotFoundError: If no such hero exists.
            VersionConflictError: If the stored version differs.
            UniquenessConflictError: If a renamed hero collides.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, hero_id: int) -> None:
        """Hard-delete a hero.

        Raises:
            HeroNotFoundError: If no such hero exists.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every hero and return how many were removed."""
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> None:
        """Check that storage is reachable.

        Raises:
            StorageUnavailableError: If it is not.
        """
        raise NotImplementedError
