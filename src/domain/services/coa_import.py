"""Heuristics turning spreadsheet rows into Chart-of-Accounts records.

Exports from Accurate and hand-made sheets differ in title rows, header
wording (English or Indonesian) and column order. The helpers here locate
the header row, match columns by name, skip summary lines and infer
account types from code prefixes. They work on plain Python rows so any
reader can feed them.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from src.domain.constants import (
    ACCOUNT_TYPE_BY_CODE_PREFIX,
    DEFAULT_ACCOUNT_TYPE,
)
from src.domain.models.accounts import CoaAccount
from src.domain.policies.account_filters import (
    has_account_identity,
    is_summary_row,
)
from src.domain.services.normalization import (
    normalize_currency,
    normalize_flag,
    normalize_level,
    normalize_text,
)
from src.utils.decimal_utils import coerce_decimal


HEADER_SCAN_LIMIT = 20

STANDARD_FORMAT = "standard"
UNKNOWN_FORMAT = "unknown"

CODE_COLUMNS = (
    "account no", "account_no", "accountno",
    "account_code", "account code", "account number",
    "kode", "kode akun", "nomor akun", "no akun", "code", "no",
)
NAME_COLUMNS = (
    "account name", "account_name", "accountname",
    "account", "nama", "nama akun", "uraian", "keterangan", "name",
    "description",
)
TYPE_COLUMNS = (
    "account_type", "account type", "type",
    "tipe", "tipe akun", "jenis", "kategori",
)
BALANCE_COLUMNS = (
    "ending balance", "ending_balance", "endingbalance", "final balance",
    "balance", "saldo", "saldo akhir", "amount", "nilai", "jumlah",
)
CURRENCY_COLUMNS = ("currency", "mata uang", "curr")
SUSPENDED_COLUMNS = ("suspended", "status", "aktif", "active")
LEVEL_COLUMNS = ("lvl", "level", "tingkat", "hierarchy")
DB_CR_COLUMNS = ("db/cr", "dbcr", "db cr", "debit/credit", "type")


class SpreadsheetFormatError(ValueError):
    """Raised when a sheet has no recognisable account columns."""


def detect_header_row(rows: Sequence[Sequence[Any]]) -> int:
    """Return the index of the header row.

    The first row within the scan limit mentioning ``account`` together
    with ``no``, ``name`` or ``code`` wins; row 0 otherwise.
    """
    for index, row in enumerate(rows[:HEADER_SCAN_LIMIT]):
        if not row:
            continue
        joined = "|".join(
            "" if cell is None else str(cell) for cell in row
        ).lower()
        if "account" in joined and (
            "no" in joined or "name" in joined or "code" in joined
        ):
            return index
    return 0


def _is_code_column(column: str) -> bool:
    return (
        "account" in column
        and ("code" in column or "no" in column or "number" in column)
        or column in ("kode", "code", "no")
        or "kode akun" in column
        or "nomor" in column
    )


def _is_name_column(column: str) -> bool:
    return (
        "account" in column
        and "name" in column
        or "nama" in column
        or column in ("name", "account")
        or "uraian" in column
        or "keterangan" in column
    )


def detect_format(columns: Sequence[str]) -> str:
    """Return ``standard`` when code and name columns are both present."""
    normalized = [column.lower().strip() for column in columns]
    has_code = any(_is_code_column(column) for column in normalized)
    has_name = any(_is_name_column(column) for column in normalized)
    return STANDARD_FORMAT if has_code and has_name else UNKNOWN_FORMAT


def rows_to_records(
    rows: Sequence[Sequence[Any]],
    header_index: int,
) -> list[dict[str, Any]]:
    """Convert raw rows below the header into header-keyed dictionaries."""
    header = rows[header_index]
    columns = []
    for position, cell in enumerate(header):
        label = normalize_text(cell)
        columns.append(label or f"__empty_{position}")
    records = []
    for row in rows[header_index + 1:]:
        if row is None:
            continue
        values = list(row) + [None] * (len(columns) - len(row))
        if all(value in (None, "") for value in values):
            continue
        records.append(dict(zip(columns, values)))
    return records


def find_column_value(
    row: Mapping[str, Any],
    candidates: Sequence[str],
) -> Any:
    """Return the value of the first candidate column found in the row.

    Exact matches on the normalised header are tried for every candidate
    before falling back to containment in either direction.

    Args:
        row: Header-keyed record.
        candidates: Column names in priority order.

    Returns:
        Any: Matching cell value, or None.
    """
    normalized = {
        str(key).lower().strip(): value for key, value in row.items()
    }
    for candidate in candidates:
        wanted = candidate.lower().strip()
        if wanted in normalized:
            return normalized[wanted]
    for candidate in candidates:
        wanted = candidate.lower().strip()
        for key, value in normalized.items():
            if key and (wanted in key or key in wanted):
                return value
    return None


def infer_account_type(
    code: str,
    declared_type: Any = None,
    db_cr: Any = None,
) -> str:
    """Return the account type for an imported row.

    A declared type always wins. Otherwise the leading digit of the code
    decides, and a Db/Cr marker only confirms types consistent with it.

    Args:
        code: Account code.
        declared_type: Value of the type column, if any.
        db_cr: Value of the debit/credit column, if any.

    Returns:
        str: Upper-case account type.
    """
    declared = normalize_text(declared_type)
    if declared:
        return declared.upper()
    code = normalize_text(code)
    account_type = ACCOUNT_TYPE_BY_CODE_PREFIX.get(
        code[:1],
        DEFAULT_ACCOUNT_TYPE,
    )
    marker = normalize_text(db_cr).upper()
    if not marker:
        return account_type
    if "CR" in marker or "CREDIT" in marker:
        credit_types = {"2", "3", "4"}
        if code[:1] in credit_types:
            return ACCOUNT_TYPE_BY_CODE_PREFIX[code[:1]]
    elif "DB" in marker or "DEBIT" in marker:
        if code[:1] in {"1", "5"}:
            return ACCOUNT_TYPE_BY_CODE_PREFIX[code[:1]]
    return account_type


def link_by_level(accounts: Sequence[CoaAccount]) -> list[CoaAccount]:
    """Derive parent links from the level column in file order.

    A row's parent is the nearest preceding row one level up. Rows that
    receive children are flagged as parents.
    """
    ancestors: dict[int, int] = {}
    parent_ids: list[int | None] = []
    for account in accounts:
        parent_id = ancestors.get(account.level - 1)
        parent_ids.append(parent_id if account.level > 1 else None)
        ancestors[account.level] = account.id
        for deeper in [lvl for lvl in ancestors if lvl > account.level]:
            del ancestors[deeper]
    with_children = {pid for pid in parent_ids if pid is not None}
    return [
        CoaAccount(
            id=account.id,
            parent_id=parent_id,
            level=account.level,
            is_parent=account.id in with_children,
            balance=account.balance,
            suspended=account.suspended,
            account_code=account.account_code,
            account_name=account.account_name,
            account_type=account.account_type,
            account_type_name=account.account_type_name,
            currency=account.currency,
        )
        for account, parent_id in zip(accounts, parent_ids)
    ]


def build_accounts_from_rows(
    rows: Sequence[Sequence[Any]],
) -> list[CoaAccount]:
    """Build linked accounts from the raw rows of a worksheet.

    Args:
        rows: Worksheet rows as value sequences, title rows included.

    Returns:
        list[CoaAccount]: Accounts with sequential ids starting at 1.

    Raises:
        SpreadsheetFormatError: If no code and name columns are found.
    """
    if not rows:
        raise SpreadsheetFormatError("The worksheet is empty")
    header_index = detect_header_row(rows)
    columns = [normalize_text(cell) for cell in rows[header_index]]
    if detect_format(columns) != STANDARD_FORMAT:
        raise SpreadsheetFormatError(
            "Unrecognised sheet: account code and account name columns "
            "are required"
        )

    accounts: list[CoaAccount] = []
    for record in rows_to_records(rows, header_index):
        code = normalize_text(find_column_value(record, CODE_COLUMNS))
        name = normalize_text(find_column_value(record, NAME_COLUMNS))
        if not has_account_identity(code, name) or is_summary_row(code, name):
            continue
        account_type = infer_account_type(
            code,
            find_column_value(record, TYPE_COLUMNS),
            find_column_value(record, DB_CR_COLUMNS),
        )
        accounts.append(
            CoaAccount(
                id=len(accounts) + 1,
                parent_id=None,
                level=normalize_level(
                    find_column_value(record, LEVEL_COLUMNS)
                ),
                is_parent=False,
                balance=coerce_decimal(
                    find_column_value(record, BALANCE_COLUMNS)
                ),
                suspended=normalize_flag(
                    find_column_value(record, SUSPENDED_COLUMNS)
                ),
                account_code=code,
                account_name=name,
                account_type=account_type,
                account_type_name=account_type.title(),
                currency=normalize_currency(
                    find_column_value(record, CURRENCY_COLUMNS)
                ),
            )
        )
    return link_by_level(accounts)


__all__ = [
    "SpreadsheetFormatError",
    "detect_header_row",
    "detect_format",
    "rows_to_records",
    "find_column_value",
    "infer_account_type",
    "link_by_level",
    "build_accounts_from_rows",
]
