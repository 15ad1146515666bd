"""Domain constants for Chart-of-Accounts handling."""

DEFAULT_CURRENCY = "IDR"

# Leading digit of an account code mapped to its account type.
ACCOUNT_TYPE_BY_CODE_PREFIX = {
    "1": "ASSET",
    "2": "LIABILITY",
    "3": "EQUITY",
    "4": "REVENUE",
    "5": "EXPENSE",
}

DEFAULT_ACCOUNT_TYPE = "ASSET"

SUMMARY_ROW_KEYWORDS = (
    "total",
    "subtotal",
    "sub total",
    "grand total",
    "difference",
)

UNKNOWN_BUDGET_NAME = "Unknown Budget"


__all__ = [
    "DEFAULT_CURRENCY",
    "ACCOUNT_TYPE_BY_CODE_PREFIX",
    "DEFAULT_ACCOUNT_TYPE",
    "SUMMARY_ROW_KEYWORDS",
    "UNKNOWN_BUDGET_NAME",
]
