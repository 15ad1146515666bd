"""Domain services package."""

from .account_hierarchy import (
    AccountHierarchy,
    displayed_balance,
    is_visible,
    toggle_expanded,
)
from .budget_variance import (
    budget_status,
    calculate_total_allocated,
    calculate_total_realisasi,
    group_realizations,
    summarize_realizations,
    variance_percentage,
)
from .coa_import import (
    SpreadsheetFormatError,
    build_accounts_from_rows,
    detect_format,
    detect_header_row,
    find_column_value,
    infer_account_type,
)
from .normalization import (
    normalize_currency,
    normalize_flag,
    normalize_level,
    normalize_optional_id,
    normalize_text,
)

__all__ = [
    "AccountHierarchy",
    "displayed_balance",
    "is_visible",
    "toggle_expanded",
    "budget_status",
    "calculate_total_allocated",
    "calculate_total_realisasi",
    "group_realizations",
    "summarize_realizations",
    "variance_percentage",
    "SpreadsheetFormatError",
    "build_accounts_from_rows",
    "detect_format",
    "detect_header_row",
    "find_column_value",
    "infer_account_type",
    "normalize_currency",
    "normalize_flag",
    "normalize_level",
    "normalize_optional_id",
    "normalize_text",
]
