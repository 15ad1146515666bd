"""Domain package for business rules and core models."""

from .constants import (
    ACCOUNT_TYPE_BY_CODE_PREFIX,
    DEFAULT_ACCOUNT_TYPE,
    DEFAULT_CURRENCY,
)
from .models import (
    AccountTreeRow,
    BudgetGroup,
    BudgetRealization,
    BudgetStatus,
    CoaAccount,
    Entity,
    RealizationSummary,
)
from .policies import has_account_identity, is_summary_row
from .services import (
    AccountHierarchy,
    displayed_balance,
    group_realizations,
    is_visible,
    summarize_realizations,
    toggle_expanded,
)

__all__ = [
    "ACCOUNT_TYPE_BY_CODE_PREFIX",
    "DEFAULT_ACCOUNT_TYPE",
    "DEFAULT_CURRENCY",
    "AccountTreeRow",
    "BudgetGroup",
    "BudgetRealization",
    "BudgetStatus",
    "CoaAccount",
    "Entity",
    "RealizationSummary",
    "has_account_identity",
    "is_summary_row",
    "AccountHierarchy",
    "displayed_balance",
    "group_realizations",
    "is_visible",
    "summarize_realizations",
    "toggle_expanded",
]
