"""Tests for the entity and budget realisation repositories."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.domain.models.accounts import Entity
from src.infrastructure import budget_repository as budget_module
from src.infrastructure import entities_repository as entities_module


def _db_port():
    engine = MagicMock()
    conn = MagicMock()
    ctx = MagicMock()
    ctx.__enter__.return_value = conn
    engine.connect.return_value = ctx
    engine.begin.return_value = ctx
    db_port = MagicMock()
    db_port.get_app_engine.return_value = engine
    return db_port, conn


def test_fetch_entities_maps_rows():
    db_port, conn = _db_port()
    conn.execute.return_value.all.return_value = [
        SimpleNamespace(id=1, entity_name="PT Satu", api_token="tok"),
        SimpleNamespace(id=2, entity_name="PT Dua", api_token=""),
    ]

    entities = entities_module.SqlAlchemyEntitiesRepository(
        db_port
    ).fetch_entities()

    assert [entity.id for entity in entities] == ["1", "2"]
    assert entities[0].api_token == "tok"
    assert entities[1].api_token is None


def test_fetch_entity_returns_none_when_missing():
    db_port, conn = _db_port()
    conn.execute.return_value.first.return_value = None

    repository = entities_module.SqlAlchemyEntitiesRepository(db_port)

    assert repository.fetch_entity("404") is None
    conn.execute.assert_called_once_with(
        entities_module.SELECT_ENTITY_SQL,
        {"entity_id": "404"},
    )


def test_insert_entity_returns_stored_record():
    db_port, conn = _db_port()
    conn.execute.return_value.one.return_value = SimpleNamespace(
        id=7,
        entity_name="PT Baru",
        api_token=None,
    )

    entity = entities_module.SqlAlchemyEntitiesRepository(
        db_port
    ).insert_entity("PT Baru", None)

    assert entity == Entity(id="7", entity_name="PT Baru")
    conn.execute.assert_called_once_with(
        entities_module.INSERT_ENTITY_SQL,
        {"entity_name": "PT Baru", "api_token": None},
    )


def test_update_entity_returns_rowcount():
    db_port, conn = _db_port()
    conn.execute.return_value.rowcount = 1

    updated = entities_module.SqlAlchemyEntitiesRepository(
        db_port
    ).update_entity(Entity(id="7", entity_name="PT Lama", api_token="t"))

    assert updated == 1
    conn.execute.assert_called_once_with(
        entities_module.UPDATE_ENTITY_SQL,
        {"entity_id": "7", "entity_name": "PT Lama", "api_token": "t"},
    )


def test_fetch_realizations_maps_rows():
    db_port, conn = _db_port()
    conn.execute.return_value.all.return_value = [
        SimpleNamespace(
            budget_id=5,
            budget_name="Operasional",
            period="2024-03",
            account_code="5100",
            account_name="Gaji",
            account_type=None,
            budget_allocated="1,000.00",
            realisasi=None,
        )
    ]

    rows = budget_module.SqlAlchemyBudgetRealizationRepository(
        db_port
    ).fetch_realizations("e1", period="2024-03")

    conn.execute.assert_called_once_with(
        budget_module.SELECT_REALIZATIONS_SQL,
        {"entity_id": "e1", "period": "2024-03"},
    )
    assert rows[0].budget_id == "5"
    assert rows[0].account_type == "UNKNOWN"
    assert rows[0].budget_allocated == Decimal("1000.00")
    assert rows[0].realisasi == Decimal("0")
