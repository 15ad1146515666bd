"""CLI adapter to import an entity's Chart of Accounts from Excel.

Reads ``COA_ENTITY_ID`` and ``COA_IMPORT_FILE`` and replaces the entity's
stored accounts with the workbook content.
"""

import os
import sys

from src.adapters.sync_accounts_cli import run_sync
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the spreadsheet import."""
    import_file = os.getenv("COA_IMPORT_FILE")
    if not import_file:
        get_app_logger().error("COA_IMPORT_FILE is required for an import.")
        sys.exit(1)
    sys.exit(run_sync(os.getenv("COA_ENTITY_ID"), import_file=import_file))


if __name__ == "__main__":  # pragma: no cover
    main()
