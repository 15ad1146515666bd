"""Use case to compare budget allocation with realisation."""

from dataclasses import dataclass

from src.application.ports.budget_repository import (
    BudgetRealizationRepositoryPort,
)
from src.domain.constants import UNKNOWN_BUDGET_NAME
from src.domain.models.accounts import Entity
from src.domain.models.budget import (
    BudgetGroup,
    BudgetRealization,
    RealizationSummary,
)
from src.domain.services.budget_variance import (
    group_realizations,
    summarize_realizations,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BudgetRealizationView:
    """Budget versus realisation figures for the presentation layer.

    Attributes:
        summary: Headline figures, None when no line matches the filters.
        groups: Lines grouped by budget name and period.
        periods: Periods available for the entity.
        account_types: Account types available for the entity.
        budget_groups: Budget names available for the entity.
    """

    summary: RealizationSummary | None
    groups: list[BudgetGroup]
    periods: list[str]
    account_types: list[str]
    budget_groups: list[str]


class GetBudgetRealizationUseCase:
    """Aggregate budget versus realisation lines for one entity."""

    def __init__(
        self,
        repository: BudgetRealizationRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing realisation lines.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        entity: Entity,
        period: str | None = None,
        account_type: str | None = None,
        budget_group: str | None = None,
        search: str | None = None,
    ) -> BudgetRealizationView:
        """Return grouped and summarised realisation for an entity.

        Args:
            entity: Entity to report on.
            period: Optional period filter.
            account_type: Optional account type filter.
            budget_group: Optional budget name filter.
            search: Optional case-insensitive budget name search.

        Returns:
            BudgetRealizationView: Summary, groups and filter options.
        """
        all_rows = self._repository.fetch_realizations(entity.id)
        rows = [
            row
            for row in all_rows
            if self._matches(row, period, account_type, budget_group)
        ]
        groups = group_realizations(rows)
        if search and search.strip():
            query = search.strip().lower()
            groups = [
                group
                for group in groups
                if query in group.budget_group_name.lower()
            ]
        summary = summarize_realizations(rows, entity, period)
        self._logger.info(
            f"Computed realisation for entity {entity.id}: "
            f"{len(rows)} lines in {len(groups)} groups"
        )
        return BudgetRealizationView(
            summary=summary,
            groups=groups,
            periods=sorted({row.period for row in all_rows}, reverse=True),
            account_types=sorted({row.account_type for row in all_rows}),
            budget_groups=sorted(
                {row.budget_name or UNKNOWN_BUDGET_NAME for row in all_rows}
            ),
        )

    @staticmethod
    def _matches(
        row: BudgetRealization,
        period: str | None,
        account_type: str | None,
        budget_group: str | None,
    ) -> bool:
        if period and row.period != period:
            return False
        if account_type and row.account_type != account_type:
            return False
        name = row.budget_name or UNKNOWN_BUDGET_NAME
        if budget_group and name != budget_group:
            return False
        return True


__all__ = ["GetBudgetRealizationUseCase", "BudgetRealizationView"]
