"""Domain normalization helpers for raw account fields."""

from src.domain.constants import DEFAULT_CURRENCY


_TRUTHY = {"true", "1", "yes", "y", "suspended"}


def normalize_flag(value) -> bool:
    """Normalize boolean-like values from stores, APIs and spreadsheets.

    Args:
        value: Raw flag value (bool, number or string).

    Returns:
        bool: True for ``True``, ``1`` and truthy strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def normalize_level(value) -> int:
    """Normalize hierarchy levels, defaulting to the root level."""
    try:
        level = int(float(str(value).strip()))
    except (TypeError, ValueError):
        return 1
    return level if level >= 1 else 1


def normalize_optional_id(value) -> int | None:
    """Normalize optional numeric identifiers such as parent references."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_currency(value: str | None) -> str:
    """Normalize currency codes, defaulting to IDR."""
    if not value:
        return DEFAULT_CURRENCY
    cleaned = str(value).strip()
    return cleaned.upper() if cleaned else DEFAULT_CURRENCY


def normalize_text(value) -> str:
    """Return a stripped string, empty for missing values."""
    if value is None:
        return ""
    return str(value).strip()


__all__ = [
    "normalize_flag",
    "normalize_level",
    "normalize_optional_id",
    "normalize_currency",
    "normalize_text",
]
