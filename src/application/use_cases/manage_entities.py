"""Use case for creating and editing business entities."""

from src.application.ports.entities_repository import EntitiesRepositoryPort
from src.domain.models.accounts import Entity
from src.infrastructure.logging.logger import get_app_logger


class ManageEntitiesUseCase:
    """Create and edit entities with name and API token checks."""

    def __init__(
        self,
        repository: EntitiesRepositoryPort,
        logger=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def create(self, entity_name: str, api_token: str | None = None) -> Entity:
        """Store a new entity.

        Args:
            entity_name: Display name, must not be blank.
            api_token: Optional Accurate API token; each token may belong
                to one entity only.

        Returns:
            Entity: Stored entity with its identifier.

        Raises:
            ValueError: If the name is blank or the token is in use.
        """
        name, token = self._validate(entity_name, api_token, entity_id=None)
        entity = self._repository.insert_entity(name, token)
        self._logger.info(f"Created entity {entity.id} ({name})")
        return entity

    def update(
        self,
        entity_id: str,
        entity_name: str,
        api_token: str | None = None,
    ) -> bool:
        """Rename an entity or replace its API token.

        Returns:
            bool: True when a row was updated.

        Raises:
            ValueError: If the name is blank or the token is in use.
        """
        name, token = self._validate(entity_name, api_token, entity_id)
        updated = self._repository.update_entity(
            Entity(id=entity_id, entity_name=name, api_token=token)
        )
        if not updated:
            self._logger.warning(f"No entity found for id {entity_id}")
            return False
        self._logger.info(f"Updated entity {entity_id} ({name})")
        return True

    def _validate(
        self,
        entity_name: str,
        api_token: str | None,
        entity_id: str | None,
    ) -> tuple[str, str | None]:
        name = entity_name.strip()
        if not name:
            raise ValueError("Entity name must not be empty")
        token = (api_token or "").strip() or None
        if token is None:
            return name, None
        for entity in self._repository.fetch_entities():
            if entity.api_token == token and entity.id != entity_id:
                raise ValueError(
                    f"API token is already used by {entity.entity_name}"
                )
        return name, token


__all__ = ["ManageEntitiesUseCase"]
