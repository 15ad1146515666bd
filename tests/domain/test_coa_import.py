"""Tests for the spreadsheet import heuristics."""

from decimal import Decimal

import pytest

from src.domain.services.coa_import import (
    SpreadsheetFormatError,
    build_accounts_from_rows,
    detect_format,
    detect_header_row,
    find_column_value,
    infer_account_type,
    rows_to_records,
)


def test_detect_header_row_skips_title_rows():
    rows = [
        ("PT Contoh",),
        ("Daftar Akun Perkiraan", None),
        (None,),
        ("Account No", "Account Name", "Balance"),
        ("1100", "Kas", 10),
    ]

    assert detect_header_row(rows) == 3


def test_detect_header_row_defaults_to_first_row():
    rows = [("Kode", "Nama Akun"), ("1100", "Kas")]

    assert detect_header_row(rows) == 0


def test_detect_format_accepts_indonesian_headers():
    assert detect_format(["Kode Akun", "Nama Akun", "Saldo"]) == "standard"
    assert detect_format(["Tanggal", "Saldo"]) == "unknown"


def test_rows_to_records_names_empty_headers_and_skips_blank_rows():
    rows = [("Kode", None, "Nama"), ("1", "x", "Kas"), (None, "", None)]

    records = rows_to_records(rows, 0)

    assert records == [{"Kode": "1", "__empty_1": "x", "Nama": "Kas"}]


def test_find_column_value_prefers_exact_header():
    row = {"Account No": "1100", "Nama Akun": "Kas"}

    assert find_column_value(row, ("account no", "no")) == "1100"
    assert find_column_value(row, ("account", "nama akun")) == "Kas"
    assert find_column_value(row, ("saldo",)) is None


def test_infer_account_type_from_prefix_and_markers():
    assert infer_account_type("1100") == "ASSET"
    assert infer_account_type("2100") == "LIABILITY"
    assert infer_account_type("5100") == "EXPENSE"
    assert infer_account_type("9100") == "ASSET"
    assert infer_account_type("4100", db_cr="Cr") == "REVENUE"
    assert infer_account_type("1100", declared_type="bank") == "BANK"


def test_build_accounts_from_rows_links_levels():
    rows = [
        ("Chart of Accounts",),
        ("Account No", "Account Name", "Level", "Balance", "Suspended"),
        ("1000", "Aset", 1, None, "No"),
        ("1100", "Kas", 2, "1,500.25", "No"),
        ("1200", "Bank", 2, 300, "Yes"),
        (None, "Total Aset", None, 1800.25, None),
        ("2000", "Kewajiban", 1, 0, None),
    ]

    accounts = build_accounts_from_rows(rows)

    assert [a.account_code for a in accounts] == [
        "1000", "1100", "1200", "2000",
    ]
    assert [a.id for a in accounts] == [1, 2, 3, 4]
    assert [a.parent_id for a in accounts] == [None, 1, 1, None]
    assert accounts[0].is_parent is True
    assert accounts[1].is_parent is False
    assert accounts[1].balance == Decimal("1500.25")
    assert accounts[2].suspended is True
    assert accounts[3].account_type == "LIABILITY"
    assert accounts[3].account_type_name == "Liability"
    assert accounts[0].currency == "IDR"


def test_build_accounts_from_rows_rejects_unknown_layout():
    with pytest.raises(SpreadsheetFormatError):
        build_accounts_from_rows([("Tanggal", "Saldo"), ("2024", 1)])
    with pytest.raises(SpreadsheetFormatError):
        build_accounts_from_rows([])
