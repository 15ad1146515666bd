"""Tests for the Excel accounts source."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from openpyxl import Workbook

from src.domain.services.coa_import import SpreadsheetFormatError
from src.infrastructure.spreadsheet_source import (
    SpreadsheetAccountsSource,
    read_first_sheet,
)


def _write_workbook(path: Path, rows) -> Path:
    workbook = Workbook()
    worksheet = workbook.active
    for row in rows:
        worksheet.append(list(row))
    workbook.save(path)
    return path


def test_read_first_sheet_returns_values(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "coa.xlsx",
        [("Kode", "Nama"), ("1100", "Kas")],
    )

    rows = read_first_sheet(path)

    assert rows == [("Kode", "Nama"), ("1100", "Kas")]


def test_fetch_accounts_parses_export(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "coa.xlsx",
        [
            ("Daftar Akun",),
            ("Account No", "Account Name", "Level", "Balance"),
            ("1000", "Aset", 1, None),
            ("1100", "Kas", 2, 2500),
            ("", "Total", None, 2500),
        ],
    )
    logger = MagicMock()

    source = SpreadsheetAccountsSource(path, logger=logger)
    accounts = source.fetch_accounts("e1")

    assert source.source_type == "excel"
    assert [account.account_code for account in accounts] == ["1000", "1100"]
    assert accounts[1].parent_id == accounts[0].id
    assert accounts[1].balance == Decimal("2500")
    logger.info.assert_called_once()


def test_fetch_accounts_rejects_unknown_sheet(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "other.xlsx",
        [("Tanggal", "Jumlah"), ("2024-01-01", 5)],
    )

    with pytest.raises(SpreadsheetFormatError):
        SpreadsheetAccountsSource(path, logger=MagicMock()).fetch_accounts(
            "e1"
        )
