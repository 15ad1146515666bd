"""Budget versus realisation aggregates."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import UNKNOWN_BUDGET_NAME
from src.domain.models.accounts import Entity
from src.domain.models.budget import (
    BudgetGroup,
    BudgetRealization,
    BudgetStatus,
    RealizationSummary,
)


_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def calculate_total_allocated(items: Iterable[BudgetRealization]) -> Decimal:
    """Return the sum of allocated amounts."""
    return sum((item.budget_allocated for item in items), start=_ZERO)


def calculate_total_realisasi(items: Iterable[BudgetRealization]) -> Decimal:
    """Return the sum of realised amounts."""
    return sum((item.realisasi for item in items), start=_ZERO)


def variance_percentage(budget: Decimal, variance: Decimal) -> Decimal:
    """Return the variance as a percentage of the budget.

    Args:
        budget: Allocated amount.
        variance: Budget minus realisation.

    Returns:
        Decimal: Percentage of the budget left (negative when overspent),
        zero when nothing was allocated.
    """
    if budget <= 0:
        return _ZERO
    return variance / budget * _HUNDRED


def budget_status(budget: Decimal, realisasi: Decimal) -> BudgetStatus:
    """Return ON_TRACK when realisation does not exceed the budget."""
    if realisasi <= budget:
        return BudgetStatus.ON_TRACK
    return BudgetStatus.OVER_BUDGET


def group_realizations(
    rows: Iterable[BudgetRealization],
) -> list[BudgetGroup]:
    """Group realisation lines by budget name and period.

    Groups keep the order in which their first line appears.

    Args:
        rows: Realisation lines for one entity.

    Returns:
        list[BudgetGroup]: One aggregate per (budget name, period).
    """
    grouped: dict[tuple[str, str], list[BudgetRealization]] = {}
    for row in rows:
        key = (row.budget_name or UNKNOWN_BUDGET_NAME, row.period)
        grouped.setdefault(key, []).append(row)

    groups = []
    for (name, period), accounts in grouped.items():
        total_budget = calculate_total_allocated(accounts)
        total_realisasi = calculate_total_realisasi(accounts)
        total_variance = total_budget - total_realisasi
        groups.append(
            BudgetGroup(
                budget_group_name=name,
                period=period,
                total_budget=total_budget,
                total_realisasi=total_realisasi,
                total_variance=total_variance,
                variance_percentage=variance_percentage(
                    total_budget,
                    total_variance,
                ),
                status=budget_status(total_budget, total_realisasi),
                accounts=accounts,
            )
        )
    return groups


def summarize_realizations(
    rows: list[BudgetRealization],
    entity: Entity,
    period: str | None = None,
) -> RealizationSummary | None:
    """Return headline figures, or None when there is nothing to report.

    Args:
        rows: Realisation lines already filtered for the view.
        entity: Entity the lines belong to.
        period: Selected period, ``None`` for all periods.

    Returns:
        RealizationSummary | None: Summary of the lines.
    """
    if not rows:
        return None
    total_budget = calculate_total_allocated(rows)
    total_realisasi = calculate_total_realisasi(rows)
    total_variance = total_budget - total_realisasi
    on_track = sum(1 for row in rows if row.status is BudgetStatus.ON_TRACK)
    return RealizationSummary(
        entity_id=entity.id,
        entity_name=entity.entity_name,
        period=period or "all",
        total_accounts=len(rows),
        total_budgets=len({row.budget_id for row in rows}),
        total_budget=total_budget,
        total_realisasi=total_realisasi,
        total_variance=total_variance,
        variance_percentage=variance_percentage(total_budget, total_variance),
        overall_status=budget_status(total_budget, total_realisasi),
        on_track_count=on_track,
        over_budget_count=len(rows) - on_track,
    )


__all__ = [
    "calculate_total_allocated",
    "calculate_total_realisasi",
    "variance_percentage",
    "budget_status",
    "group_realizations",
    "summarize_realizations",
]
