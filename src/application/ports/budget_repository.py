"""Port for reading budget allocations joined with realisation."""

from typing import Protocol

from src.domain.models.budget import BudgetRealization


class BudgetRealizationRepositoryPort(Protocol):
    """Port exposing budget versus realisation lines."""

    def fetch_realizations(
        self,
        entity_id: str,
        period: str | None = None,
    ) -> list[BudgetRealization]:
        """Return realisation lines of an entity, optionally for a period."""


__all__ = ["BudgetRealizationRepositoryPort"]
