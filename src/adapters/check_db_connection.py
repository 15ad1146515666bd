"""CLI to check the application database and report stored accounts.

Connects with the configured ``APP_DB_URL``, verifies that the accounts
table exists and logs how many accounts, parents and suspended accounts
are stored per entity.
"""

import sys

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from src.infrastructure.container import build_database_adapter
from src.infrastructure.logging.logger import get_app_logger


ACCOUNTS_TABLE = "accurate_accounts"

COUNT_ACCOUNTS_SQL = text(
    """
    SELECT entity_id,
           COUNT(*) AS total,
           SUM(CASE WHEN is_parent THEN 1 ELSE 0 END) AS parents,
           SUM(CASE WHEN suspended THEN 1 ELSE 0 END) AS suspended
    FROM accurate_accounts
    WHERE is_active = TRUE
    GROUP BY entity_id
    ORDER BY entity_id
    """
)


def run_check() -> int:
    """Report stored account counts per entity.

    Returns:
        int: 0 when the database answers and the accounts table exists,
        1 otherwise.
    """
    logger = get_app_logger()
    engine = build_database_adapter().get_app_engine()
    logger.info(f"Application DB: {engine.url}")

    try:
        if not inspect(engine).has_table(ACCOUNTS_TABLE):
            logger.warning(
                f"Table {ACCOUNTS_TABLE} does not exist yet; "
                "run a sync or an import first."
            )
            return 1
        with engine.connect() as conn:
            rows = conn.execute(COUNT_ACCOUNTS_SQL).all()
    except SQLAlchemyError as exc:
        logger.error(f"Database check failed: {exc}")
        return 1

    if not rows:
        logger.info("Connection is working. No accounts stored yet.")
        return 0
    for row in rows:
        logger.info(
            f"Entity {row.entity_id}: {row.total} accounts, "
            f"{row.parents or 0} parents, {row.suspended or 0} suspended"
        )
    logger.info(f"Connection is working. {len(rows)} entities have accounts.")
    return 0


def main() -> None:
    """Run the database check and exit with its status."""
    sys.exit(run_check())


if __name__ == "__main__":  # pragma: no cover
    main()
