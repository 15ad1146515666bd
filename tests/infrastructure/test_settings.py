"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import AppSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(
        settings_module,
        "get_project_root",
        lambda: tmp_path,
    )
    monkeypatch.setattr(
        settings_module,
        "get_app_logger",
        lambda: MagicMock(),
    )
    for name in (
        "COA_SOURCE",
        "COA_IMPORT_FILE",
        "ACCURATE_HOST",
        "ACCURATE_SECRET_KEY",
        "ACCURATE_PAGE_SIZE",
        "ACCURATE_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    settings = AppSettings.from_env()

    assert settings.coa_source == "accurate"
    assert settings.accurate_host == "https://zeus.accurate.id"
    assert settings.accurate_secret_key is None
    assert settings.accurate_page_size == 100
    assert settings.accurate_timeout == 30.0
    assert settings.import_file is None


def test_from_env_reads_values(monkeypatch, tmp_path: Path) -> None:
    workbook = tmp_path / "coa.xlsx"
    workbook.touch()
    monkeypatch.setenv("COA_SOURCE", " Spreadsheet ")
    monkeypatch.setenv("COA_IMPORT_FILE", str(workbook))
    monkeypatch.setenv("ACCURATE_HOST", "https://public.accurate.id/")
    monkeypatch.setenv("ACCURATE_SECRET_KEY", "secret")
    monkeypatch.setenv("ACCURATE_PAGE_SIZE", "250")
    monkeypatch.setenv("ACCURATE_TIMEOUT", "10")

    settings = AppSettings.from_env()

    assert settings.coa_source == "spreadsheet"
    assert settings.import_file == workbook.resolve()
    assert settings.accurate_host == "https://public.accurate.id"
    assert settings.accurate_secret_key == "secret"
    assert settings.accurate_page_size == 250
    assert settings.accurate_timeout == 10.0


def test_invalid_integers_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("ACCURATE_PAGE_SIZE", "lots")
    monkeypatch.setenv("ACCURATE_TIMEOUT", "-5")

    settings = AppSettings.from_env()

    assert settings.accurate_page_size == 100
    assert settings.accurate_timeout == 30.0


def test_single_workbook_in_data_dir_is_default(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "coa.xlsx").touch()

    settings = AppSettings.from_env()

    assert settings.import_file == (data_dir / "coa.xlsx").resolve()


def test_multiple_workbooks_are_ambiguous(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "a.xlsx").touch()
    (data_dir / "b.xlsx").touch()

    settings = AppSettings.from_env()

    assert settings.import_file is None
