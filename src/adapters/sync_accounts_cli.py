"""CLI adapter to synchronize an entity's Chart of Accounts.

This module wires the SyncAccountsUseCase to the configured source
(Accurate API or spreadsheet) and the SQL destination. The entity is read
from ``COA_ENTITY_ID``.
"""

import os
import sys

from src.application.use_cases.sync_accounts import SyncAccountsUseCase
from src.infrastructure.container import (
    build_accounts_destination,
    build_accounts_source,
    build_database_adapter,
    build_entities_repository,
)
from src.infrastructure.logging.logger import get_app_logger


def run_sync(entity_id: str | None, import_file: str | None = None) -> int:
    """Synchronize accounts for one entity.

    Args:
        entity_id: Entity to refresh.
        import_file: Optional workbook forcing the spreadsheet source.

    Returns:
        int: Process exit code.
    """
    logger = get_app_logger()
    if not entity_id:
        logger.error("COA_ENTITY_ID is required to synchronize accounts.")
        return 1

    db_adapter = build_database_adapter()
    entity = build_entities_repository(db_adapter).fetch_entity(entity_id)
    if entity is None:
        logger.error(f"Entity {entity_id} does not exist.")
        return 1

    try:
        source = build_accounts_source(entity, import_file=import_file)
        use_case = SyncAccountsUseCase(
            source=source,
            destination=build_accounts_destination(db_adapter),
            logger=logger,
        )
        result = use_case.run(entity.id)
    except (RuntimeError, ValueError) as exc:
        logger.error(f"Account synchronization failed: {exc}")
        return 1

    print(
        f"Synchronized {result.inserted_count} of {result.source_count} "
        f"accounts for {entity.entity_name}."
    )
    return 0


def main() -> None:
    """Run the accounts synchronization use case."""
    sys.exit(run_sync(os.getenv("COA_ENTITY_ID")))


if __name__ == "__main__":  # pragma: no cover
    main()
