"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def project_root(tmp_path, monkeypatch):
    """Redirect log files to a temporary project root with a fixed date."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20241018"),
    )
    return tmp_path


@pytest.fixture
def fake_build(monkeypatch):
    """Make every LoggerBuilder.build return the same mock logger."""
    built = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda _: built)
    return built


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_builder_places_log_file_under_subdir(project_root):
    sync_logger = (
        logger_module.LoggerBuilder()
        .name("coa_sync_builder_test")
        .subdir("sync")
        .prefix("sync_logs")
        .level(logging.WARNING)
        .console(False)
        .build()
    )

    assert sync_logger.level == logging.WARNING
    assert sync_logger.propagate is False
    handlers = _file_handlers(sync_logger)
    assert [h.baseFilename for h in handlers] == [
        str(project_root / "logs" / "sync" / "20241018_sync_logs.log")
    ]
    assert all(
        isinstance(h, logging.FileHandler) for h in sync_logger.handlers
    )


def test_builder_reuses_configured_logger(project_root):
    builder = logger_module.LoggerBuilder().name("coa_reuse_test")

    first = builder.build()
    second = builder.build()

    assert first is second
    assert len(first.handlers) == 2


def test_builder_accepts_custom_factories(project_root):
    formatter = logging.Formatter("%(message)s")
    console = MagicMock()

    built = (
        logger_module.LoggerBuilder()
        .name("coa_factories_test")
        .formatter(lambda: formatter)
        .console_handler(lambda fmt: console)
        .build()
    )

    assert console in built.handlers
    assert _file_handlers(built)[0].formatter is formatter


def test_default_handlers_log_info_with_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()

    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "app.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    for handler in (file_handler, console_handler):
        assert handler.level == logging.INFO
        assert handler.formatter is fmt
    file_handler.close()


def test_logger_wrapper_forwards_each_level(fake_build):
    logger_module.Logger._instance = None
    wrapper = logger_module.Logger("coa_dashboard")

    for level in ("debug", "info", "warning", "error", "critical"):
        getattr(wrapper, level)(f"{level} message")
        getattr(fake_build, level).assert_called_once_with(f"{level} message")
    assert logger_module.Logger("ignored") is wrapper
    logger_module.Logger._instance = None


def test_app_and_usage_loggers_are_separate_singletons(fake_build):
    logger_module.AppLogger._instance = None
    logger_module.UsageLogger._instance = None

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert app_logger.logger is fake_build
    logger_module.AppLogger._instance = None
    logger_module.UsageLogger._instance = None


def test_usage_logger_writes_to_usage_directory(project_root):
    """UsageLogger should keep dashboard events apart from app events."""
    logger_module.UsageLogger._instance = None

    usage_logger = logger_module.UsageLogger("coa_dashboard.usage.test")
    usage_logger.info("page=Chart of Accounts")

    log_file = project_root / "logs" / "usage" / "20241018_usage_logs.log"
    assert "page=Chart of Accounts" in log_file.read_text(encoding="utf-8")
    logger_module.UsageLogger._instance = None
