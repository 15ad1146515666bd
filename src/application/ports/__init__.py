"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .accounts_sync import AccountsDestinationPort, AccountsSourcePort
from .budget_repository import BudgetRealizationRepositoryPort
from .database import DatabaseEnginePort
from .entities_repository import EntitiesRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "AccountsDestinationPort",
    "AccountsSourcePort",
    "BudgetRealizationRepositoryPort",
    "DatabaseEnginePort",
    "EntitiesRepositoryPort",
]
