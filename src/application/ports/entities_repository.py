"""Port for reading and maintaining business entities."""

from typing import Protocol

from src.domain.models.accounts import Entity


class EntitiesRepositoryPort(Protocol):
    """Port exposing access to entities."""

    def fetch_entities(self) -> list[Entity]:
        """Return all entities ordered by name."""

    def fetch_entity(self, entity_id: str) -> Entity | None:
        """Return a single entity, or None when it does not exist."""

    def insert_entity(
        self,
        entity_name: str,
        api_token: str | None,
    ) -> Entity:
        """Store a new entity and return it with its identifier."""

    def update_entity(self, entity: Entity) -> int:
        """Overwrite an entity's name and token and return the row count."""


__all__ = ["EntitiesRepositoryPort"]
