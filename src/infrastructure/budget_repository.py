"""SQLAlchemy-backed repository for budget versus realisation lines."""

from sqlalchemy import text

from src.application.ports.budget_repository import (
    BudgetRealizationRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.domain.models.budget import BudgetRealization
from src.utils.decimal_utils import coerce_decimal


SELECT_REALIZATIONS_SQL = text(
    """
    SELECT b.id AS budget_id,
           b.name AS budget_name,
           b.period AS period,
           bi.account_code AS account_code,
           bi.account_name AS account_name,
           bi.account_type AS account_type,
           bi.allocated_amount AS budget_allocated,
           bi.realisasi_snapshot AS realisasi
    FROM budget_items bi
    JOIN budgets b ON b.id = bi.budget_id
    WHERE b.entity_id = :entity_id
      AND (CAST(:period AS TEXT) IS NULL OR b.period = :period)
    ORDER BY b.period DESC, b.name, bi.account_code
    """
)


class SqlAlchemyBudgetRealizationRepository(BudgetRealizationRepositoryPort):
    """Repository joining budgets with their line items."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the application engine.
        """
        self._db_port = db_port

    def fetch_realizations(
        self,
        entity_id: str,
        period: str | None = None,
    ) -> list[BudgetRealization]:
        """Return realisation lines of an entity."""
        engine = self._db_port.get_app_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_REALIZATIONS_SQL,
                {"entity_id": entity_id, "period": period},
            ).all()
        return [
            BudgetRealization(
                budget_id=str(row.budget_id),
                budget_name=row.budget_name,
                period=str(row.period or ""),
                account_code=row.account_code or "",
                account_name=row.account_name or "",
                account_type=row.account_type or "UNKNOWN",
                budget_allocated=coerce_decimal(row.budget_allocated),
                realisasi=coerce_decimal(row.realisasi),
            )
            for row in rows
        ]


__all__ = [
    "SqlAlchemyBudgetRealizationRepository",
    "SELECT_REALIZATIONS_SQL",
]
