"""Domain models package."""

from .accounts import AccountTreeRow, CoaAccount, Entity
from .budget import (
    BudgetGroup,
    BudgetRealization,
    BudgetStatus,
    RealizationSummary,
)

__all__ = [
    "CoaAccount",
    "AccountTreeRow",
    "Entity",
    "BudgetStatus",
    "BudgetRealization",
    "BudgetGroup",
    "RealizationSummary",
]
