"""Tests for the sync_accounts_cli and import_accounts_cli adapters."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters import import_accounts_cli, sync_accounts_cli
from src.domain.models.accounts import Entity


ENTITY = Entity(id="e1", entity_name="PT Contoh", api_token="token")


def _patch_wiring(monkeypatch, entity=ENTITY, source=None):
    fake_logger = MagicMock()
    dummy_adapter = object()
    entities = MagicMock()
    entities.fetch_entity.return_value = entity
    fake_use_case = MagicMock()
    fake_use_case.run.return_value = SimpleNamespace(
        source_count=4,
        inserted_count=3,
    )
    captured = {}

    monkeypatch.setattr(
        sync_accounts_cli,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.setattr(
        sync_accounts_cli,
        "build_database_adapter",
        lambda: dummy_adapter,
    )
    monkeypatch.setattr(
        sync_accounts_cli,
        "build_entities_repository",
        lambda adapter: entities,
    )

    def _fake_source(entity, import_file=None):
        captured["import_file"] = import_file
        if isinstance(source, Exception):
            raise source
        return source or "source"

    monkeypatch.setattr(
        sync_accounts_cli,
        "build_accounts_source",
        _fake_source,
    )
    monkeypatch.setattr(
        sync_accounts_cli,
        "build_accounts_destination",
        lambda adapter: "destination",
    )

    def _fake_use_case(source, destination, logger):
        captured["source"] = source
        assert destination == "destination"
        assert logger is fake_logger
        return fake_use_case

    monkeypatch.setattr(
        sync_accounts_cli,
        "SyncAccountsUseCase",
        _fake_use_case,
    )
    return fake_logger, fake_use_case, captured


def test_main_runs_use_case_and_prints_result(monkeypatch, capsys):
    """The CLI should run the use case and print the summary."""
    _, fake_use_case, captured = _patch_wiring(monkeypatch)
    monkeypatch.setenv("COA_ENTITY_ID", "e1")

    with pytest.raises(SystemExit) as exit_info:
        sync_accounts_cli.main()

    assert exit_info.value.code == 0
    fake_use_case.run.assert_called_once_with("e1")
    assert captured["import_file"] is None
    out = capsys.readouterr().out
    assert "3 of 4" in out
    assert "PT Contoh" in out


def test_run_sync_requires_entity(monkeypatch):
    fake_logger, fake_use_case, _ = _patch_wiring(monkeypatch)

    assert sync_accounts_cli.run_sync(None) == 1
    fake_logger.error.assert_called_once()
    fake_use_case.run.assert_not_called()


def test_run_sync_rejects_unknown_entity(monkeypatch):
    fake_logger, fake_use_case, _ = _patch_wiring(monkeypatch, entity=None)

    assert sync_accounts_cli.run_sync("missing") == 1
    fake_use_case.run.assert_not_called()


def test_run_sync_reports_source_errors(monkeypatch):
    fake_logger, _, _ = _patch_wiring(
        monkeypatch,
        source=RuntimeError("ACCURATE_SECRET_KEY is not configured"),
    )

    assert sync_accounts_cli.run_sync("e1") == 1
    message = fake_logger.error.call_args.args[0]
    assert "ACCURATE_SECRET_KEY" in message


def test_import_cli_forwards_workbook(monkeypatch):
    _, _, captured = _patch_wiring(monkeypatch)
    monkeypatch.setenv("COA_ENTITY_ID", "e1")
    monkeypatch.setenv("COA_IMPORT_FILE", "/tmp/coa.xlsx")

    with pytest.raises(SystemExit) as exit_info:
        import_accounts_cli.main()

    assert exit_info.value.code == 0
    assert captured["import_file"] == "/tmp/coa.xlsx"


def test_import_cli_requires_workbook(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        import_accounts_cli,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.delenv("COA_IMPORT_FILE", raising=False)

    with pytest.raises(SystemExit) as exit_info:
        import_accounts_cli.main()

    assert exit_info.value.code == 1
    fake_logger.error.assert_called_once()
