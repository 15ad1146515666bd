"""Policies deciding which imported rows are real accounts."""

from src.domain.constants import SUMMARY_ROW_KEYWORDS


def is_summary_row(code: str, name: str) -> bool:
    """Return True for total, subtotal and difference rows.

    Args:
        code: Account code cell text.
        name: Account name cell text.

    Returns:
        bool: True when either cell mentions a summary keyword.
    """
    code_lower = code.strip().lower()
    name_lower = name.strip().lower()
    return any(
        keyword in code_lower or keyword in name_lower
        for keyword in SUMMARY_ROW_KEYWORDS
    )


def has_account_identity(code: str, name: str) -> bool:
    """Return True when the row carries an account code or name."""
    return bool(code.strip() or name.strip())


__all__ = ["is_summary_row", "has_account_identity"]
