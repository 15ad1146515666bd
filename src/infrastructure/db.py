"""SQLAlchemy engine for the application store.

Entities, synchronized accounts and budgets all live in one PostgreSQL
database addressed by ``APP_DB_URL``. The engine is created lazily and
shared by every repository in the process.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


APP_DB_URL_VAR = "APP_DB_URL"


def _get_env_var(name: str) -> str:
    """Return a required setting, loading ``.env`` first.

    Args:
        name: Environment variable holding the setting.

    Returns:
        str: Configured value.

    Raises:
        RuntimeError: If the variable is unset or blank.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Return a pooled engine that checks connections before use."""
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
    )


_app_engine: Optional[Engine] = None


def get_app_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _app_engine
    if _app_engine is None:
        _app_engine = _create_engine(_get_env_var(APP_DB_URL_VAR))
    return _app_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """``DatabaseEnginePort`` backed by the shared application engine."""

    def get_app_engine(self) -> Engine:
        return get_app_engine()


__all__ = [
    "APP_DB_URL_VAR",
    "get_app_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
