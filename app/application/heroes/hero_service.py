"""
Use cases: Hero management.

Input: raw JSON-like payloads and ids from the interface layer.
Output: Hero entities.
Side effects: Writes through the HeroRepository port.
Failure cases: ValidationError, HeroNotFoundError, VersionConflictError,
    UniquenessConflictError, StorageUnavailableError. All propagate unchanged.
"""

import logging
from collections.abc import Mapping
from typing import Any

from app.domain.heroes.entities import Hero
from app.domain.heroes.ports import HeroRepository
from app.domain.heroes.validation import validate_hero_changes, validate_new_hero

logger = logging.getLogger(__name__)


class HeroService:
    """Orchestrates validation and persistence per hero use case.

    Holds only its repository. Instances share no mutable state.
    """

    def __init__(self, repository: HeroRepository) -> None:
        """Initialize the service.

        Args:
            repository: Port used for every read and write.
        """
        self._repository = repository

    def create_hero(self, payload: Mapping[str, Any]) -> Hero:
        """Validate a payload and store it as a new hero."""
        logger.info("Creating hero")
        new_hero = validate_new_hero(payload)
        return self._repository.create(new_hero)

    def get_hero(self, hero_id: int) -> Hero:
        logger.info("Retrieving hero id=%d", hero_id)
        return self._repository.get_by_id(hero_id)

    def list_heroes(self) -> list[Hero]:
        logger.info("Listing heroes")
        return self._repository.list()

    def update_hero(
        self, hero_id: int, expected_version: int, payload: Mapping[str, Any]
    ) -> Hero:
        """Validate submitted fields and apply them if the version still matches.

        Args:
            hero_id: Hero to update.
            expected_version: Version token echoed back by the client.
            payload: Partial or full set of client-editable fields.

        Returns:
            The updated hero.
        """
        logger.info("Updating hero id=%d expected_version=%d", hero_id, expected_version)
        changes = validate_hero_changes(payload)
        return self._repository.update(hero_id, expected_version, changes)

    def delete_hero(self, hero_id: int) -> None:
        logger.info("Deleting hero id=%d", hero_id)
        self._repository.delete(hero_id)

    def delete_all_heroes(self) -> int:
        logger.info("Removing all heroes")
        return self._repository.delete_all()
