"""Composition root for wiring infrastructure adapters."""

from pathlib import Path

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.accounts_sync import (
    AccountsDestinationPort,
    AccountsSourcePort,
)
from src.application.ports.budget_repository import (
    BudgetRealizationRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.entities_repository import EntitiesRepositoryPort
from src.domain.models.accounts import Entity
from src.infrastructure.accounts_repository import (
    SqlAlchemyAccountsRepository,
)
from src.infrastructure.accounts_sync import SqlAlchemyAccountsDestination
from src.infrastructure.accurate_source import AccurateAccountsSource
from src.infrastructure.budget_repository import (
    SqlAlchemyBudgetRealizationRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.entities_repository import (
    SqlAlchemyEntitiesRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import AppSettings
from src.infrastructure.spreadsheet_source import SpreadsheetAccountsSource


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_accounts_source(
    entity: Entity,
    settings: AppSettings | None = None,
    import_file: Path | str | None = None,
) -> AccountsSourcePort:
    """Return the configured accounts source adapter.

    An explicit ``import_file`` always selects the spreadsheet source.
    """
    resolved = settings or AppSettings.from_env()
    spreadsheet = import_file or (
        resolved.import_file if resolved.coa_source == "spreadsheet" else None
    )
    if resolved.coa_source == "spreadsheet" and spreadsheet is None:
        raise RuntimeError(
            "Spreadsheet source requires a COA_IMPORT_FILE value."
        )
    if spreadsheet is not None:
        return SpreadsheetAccountsSource(spreadsheet, logger=get_app_logger())
    return AccurateAccountsSource(
        api_token=entity.api_token,
        secret_key=resolved.accurate_secret_key,
        host=resolved.accurate_host,
        page_size=resolved.accurate_page_size,
        timeout=resolved.accurate_timeout,
        logger=get_app_logger(),
    )


def build_accounts_destination(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsDestinationPort:
    """Return the accounts destination adapter."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsDestination(resolved_db)


def build_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsRepositoryPort:
    """Return the stored accounts repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsRepository(resolved_db)


def build_entities_repository(
    db_port: DatabaseEnginePort | None = None,
) -> EntitiesRepositoryPort:
    """Return the entities repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyEntitiesRepository(resolved_db)


def build_budget_repository(
    db_port: DatabaseEnginePort | None = None,
) -> BudgetRealizationRepositoryPort:
    """Return the budget realisation repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyBudgetRealizationRepository(resolved_db)


__all__ = [
    "build_database_adapter",
    "build_accounts_source",
    "build_accounts_destination",
    "build_accounts_repository",
    "build_entities_repository",
    "build_budget_repository",
]
