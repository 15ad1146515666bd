"""Application use cases package."""

from .delete_accounts import DeleteAccountsUseCase
from .edit_account import EditAccountUseCase
from .get_accounts_tree import (
    AccountsTreeView,
    GetAccountsTreeUseCase,
    build_accounts_tree_view,
)
from .get_budget_realization import (
    BudgetRealizationView,
    GetBudgetRealizationUseCase,
)
from .manage_entities import ManageEntitiesUseCase
from .sync_accounts import SyncAccountsResult, SyncAccountsUseCase

__all__ = [
    "SyncAccountsUseCase",
    "SyncAccountsResult",
    "GetAccountsTreeUseCase",
    "AccountsTreeView",
    "build_accounts_tree_view",
    "GetBudgetRealizationUseCase",
    "BudgetRealizationView",
    "DeleteAccountsUseCase",
    "EditAccountUseCase",
    "ManageEntitiesUseCase",
]
