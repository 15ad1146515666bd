"""Database ports for the COA budget dashboard.

This module defines the application-layer protocol for accessing the
application database engine. Infrastructure implementations are expected
to provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the application database engine.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_app_engine(self) -> Engine:
        """Get the engine for the application database.

        Returns:
            Engine: SQLAlchemy engine holding entities, accounts and budgets.
        """


__all__ = ["DatabaseEnginePort"]
