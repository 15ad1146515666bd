"""SQLAlchemy-backed repository for business entities."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.entities_repository import EntitiesRepositoryPort
from src.domain.models.accounts import Entity


SELECT_ENTITIES_SQL = text(
    """
    SELECT id, entity_name, api_token
    FROM entity
    ORDER BY entity_name
    """
)

SELECT_ENTITY_SQL = text(
    """
    SELECT id, entity_name, api_token
    FROM entity
    WHERE id = :entity_id
    """
)

INSERT_ENTITY_SQL = text(
    """
    INSERT INTO entity (entity_name, api_token)
    VALUES (:entity_name, :api_token)
    RETURNING id, entity_name, api_token
    """
)

UPDATE_ENTITY_SQL = text(
    """
    UPDATE entity
    SET entity_name = :entity_name, api_token = :api_token
    WHERE id = :entity_id
    """
)


def _entity_from_row(row) -> Entity:
    return Entity(
        id=str(row.id),
        entity_name=row.entity_name or "",
        api_token=row.api_token or None,
    )


class SqlAlchemyEntitiesRepository(EntitiesRepositoryPort):
    """Repository backed by SQLAlchemy for the entity table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def fetch_entities(self) -> list[Entity]:
        """Return all entities ordered by name."""
        engine = self._db_port.get_app_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_ENTITIES_SQL).all()
        return [_entity_from_row(row) for row in rows]

    def fetch_entity(self, entity_id: str) -> Entity | None:
        """Return the entity with the given id, if any."""
        engine = self._db_port.get_app_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_ENTITY_SQL,
                {"entity_id": entity_id},
            ).first()
        return _entity_from_row(row) if row is not None else None

    def insert_entity(
        self,
        entity_name: str,
        api_token: str | None,
    ) -> Entity:
        """Insert an entity and return the stored record."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            row = conn.execute(
                INSERT_ENTITY_SQL,
                {"entity_name": entity_name, "api_token": api_token},
            ).one()
        return _entity_from_row(row)

    def update_entity(self, entity: Entity) -> int:
        """Update an entity's name and API token."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            result = conn.execute(
                UPDATE_ENTITY_SQL,
                {
                    "entity_id": entity.id,
                    "entity_name": entity.entity_name,
                    "api_token": entity.api_token,
                },
            )
        return result.rowcount


__all__ = ["SqlAlchemyEntitiesRepository"]
