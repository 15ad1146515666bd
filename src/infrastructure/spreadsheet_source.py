"""Accounts source backed by an Excel workbook."""

from pathlib import Path
from typing import BinaryIO

from openpyxl import load_workbook

from src.application.ports.accounts_sync import AccountsSourcePort
from src.domain.models.accounts import CoaAccount
from src.domain.services.coa_import import build_accounts_from_rows
from src.infrastructure.logging.logger import get_app_logger


def read_first_sheet(path: Path | str | BinaryIO) -> list[tuple]:
    """Return the raw cell values of the workbook's first sheet.

    Args:
        path: Workbook location or an open binary file.

    Returns:
        list[tuple]: One tuple of values per row.
    """
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        worksheet = workbook.worksheets[0]
        return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


class SpreadsheetAccountsSource(AccountsSourcePort):
    """Account source reading a Chart-of-Accounts export."""

    source_type = "excel"

    def __init__(
        self,
        path: Path | str | BinaryIO,
        logger=None,
    ) -> None:
        """Initialize the source adapter.

        Args:
            path: Workbook to import, as a path or an uploaded file.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._path = path
        self._logger = logger or get_app_logger()

    def fetch_accounts(self, entity_id: str) -> list[CoaAccount]:
        """Return the accounts found in the workbook.

        Raises:
            SpreadsheetFormatError: If the sheet has no account columns.
        """
        rows = read_first_sheet(self._path)
        accounts = build_accounts_from_rows(rows)
        source_name = getattr(self._path, "name", self._path)
        self._logger.info(
            f"Parsed {len(accounts)} accounts from {source_name} "
            f"({len(rows)} rows) for entity {entity_id}"
        )
        return accounts


__all__ = ["SpreadsheetAccountsSource", "read_first_sheet"]
