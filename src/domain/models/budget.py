"""Domain models for budget allocation versus realisation."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class BudgetStatus(str, Enum):
    """Whether realisation stays within the allocated budget."""

    ON_TRACK = "ON_TRACK"
    OVER_BUDGET = "OVER_BUDGET"


@dataclass(frozen=True)
class BudgetRealization:
    """Budgeted amount and realisation for one account in one period."""

    budget_id: str
    budget_name: str | None
    period: str
    account_code: str
    account_name: str
    account_type: str
    budget_allocated: Decimal
    realisasi: Decimal

    @property
    def variance(self) -> Decimal:
        """Return the remaining budget (negative when overspent)."""
        return self.budget_allocated - self.realisasi

    @property
    def variance_percentage(self) -> Decimal:
        """Return the remaining budget as a percentage of the allocation."""
        from src.domain.services.budget_variance import variance_percentage

        return variance_percentage(self.budget_allocated, self.variance)

    @property
    def status(self) -> BudgetStatus:
        """Return the on-track status of this line."""
        from src.domain.services.budget_variance import budget_status

        return budget_status(self.budget_allocated, self.realisasi)


@dataclass(frozen=True)
class BudgetGroup:
    """Realisation lines sharing a budget name and period."""

    budget_group_name: str
    period: str
    total_budget: Decimal
    total_realisasi: Decimal
    total_variance: Decimal
    variance_percentage: Decimal
    status: BudgetStatus
    accounts: list[BudgetRealization] = field(default_factory=list)


@dataclass(frozen=True)
class RealizationSummary:
    """Headline figures for an entity over a period."""

    entity_id: str
    entity_name: str
    period: str
    total_accounts: int
    total_budgets: int
    total_budget: Decimal
    total_realisasi: Decimal
    total_variance: Decimal
    variance_percentage: Decimal
    overall_status: BudgetStatus
    on_track_count: int
    over_budget_count: int


__all__ = [
    "BudgetStatus",
    "BudgetRealization",
    "BudgetGroup",
    "RealizationSummary",
]
