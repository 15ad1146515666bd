"""Domain policies package."""

from .account_filters import has_account_identity, is_summary_row

__all__ = ["is_summary_row", "has_account_identity"]
