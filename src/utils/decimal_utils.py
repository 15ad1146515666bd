"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Strings coming from spreadsheets or the Accurate API may carry
    thousand separators or surrounding whitespace; those are stripped.
    Anything that still fails to parse is treated as zero.

    Args:
        value: Raw numeric value from SQL, API payloads or spreadsheets.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return Decimal("0")
        value = cleaned
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


__all__ = ["coerce_decimal"]
