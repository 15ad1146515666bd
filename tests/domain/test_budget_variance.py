"""Tests for budget versus realisation aggregates."""

from decimal import Decimal

from src.domain.models.accounts import Entity
from src.domain.models.budget import BudgetRealization, BudgetStatus
from src.domain.services.budget_variance import (
    budget_status,
    group_realizations,
    summarize_realizations,
    variance_percentage,
)


def _line(
    budget_id: str,
    name: str | None,
    period: str,
    allocated: str,
    realised: str,
    code: str = "5100",
) -> BudgetRealization:
    return BudgetRealization(
        budget_id=budget_id,
        budget_name=name,
        period=period,
        account_code=code,
        account_name="Biaya",
        account_type="EXPENSE",
        budget_allocated=Decimal(allocated),
        realisasi=Decimal(realised),
    )


def test_line_variance_and_status():
    within = _line("b1", "Ops", "2024-01", "100", "100")
    over = _line("b1", "Ops", "2024-01", "100", "100.01")

    assert within.variance == Decimal("0")
    assert within.status is BudgetStatus.ON_TRACK
    assert over.variance == Decimal("-0.01")
    assert over.status is BudgetStatus.OVER_BUDGET
    assert over.variance_percentage == Decimal("-0.01")
    assert _line("b1", "Ops", "2024-01", "0", "5").variance_percentage == 0


def test_variance_percentage_is_zero_without_budget():
    assert variance_percentage(Decimal("0"), Decimal("-50")) == Decimal("0")
    assert variance_percentage(Decimal("200"), Decimal("50")) == Decimal("25")


def test_budget_status_thresholds():
    assert budget_status(Decimal("10"), Decimal("10")) is BudgetStatus.ON_TRACK
    assert (
        budget_status(Decimal("10"), Decimal("11"))
        is BudgetStatus.OVER_BUDGET
    )


def test_group_realizations_groups_by_name_and_period():
    rows = [
        _line("b1", "Ops", "2024-02", "100", "40"),
        _line("b2", None, "2024-02", "10", "20"),
        _line("b1", "Ops", "2024-02", "50", "60", code="5200"),
        _line("b3", "Ops", "2024-01", "30", "10"),
    ]

    groups = group_realizations(rows)

    assert [(g.budget_group_name, g.period) for g in groups] == [
        ("Ops", "2024-02"),
        ("Unknown Budget", "2024-02"),
        ("Ops", "2024-01"),
    ]
    ops = groups[0]
    assert ops.total_budget == Decimal("150")
    assert ops.total_realisasi == Decimal("100")
    assert ops.total_variance == Decimal("50")
    assert ops.status is BudgetStatus.ON_TRACK
    assert len(ops.accounts) == 2
    assert groups[1].status is BudgetStatus.OVER_BUDGET


def test_summarize_realizations_counts_lines():
    entity = Entity(id="e1", entity_name="PT Contoh")
    rows = [
        _line("b1", "Ops", "2024-02", "100", "40"),
        _line("b1", "Ops", "2024-02", "50", "60"),
        _line("b2", "Capex", "2024-02", "50", "0"),
    ]

    summary = summarize_realizations(rows, entity, "2024-02")

    assert summary.entity_name == "PT Contoh"
    assert summary.period == "2024-02"
    assert summary.total_accounts == 3
    assert summary.total_budgets == 2
    assert summary.total_budget == Decimal("200")
    assert summary.total_realisasi == Decimal("100")
    assert summary.variance_percentage == Decimal("50")
    assert summary.overall_status is BudgetStatus.ON_TRACK
    assert summary.on_track_count == 2
    assert summary.over_budget_count == 1


def test_summarize_realizations_empty_returns_none():
    entity = Entity(id="e1", entity_name="PT Contoh")

    assert summarize_realizations([], entity) is None
    summary = summarize_realizations(
        [_line("b1", "Ops", "2024-02", "1", "1")],
        entity,
    )
    assert summary.period == "all"


def test_line_properties_match_service_functions():
    for allocated, realised in (("80", "100"), ("0", "5"), ("250", "100")):
        line = _line("b1", "Ops", "2024-01", allocated, realised)

        assert line.variance_percentage == variance_percentage(
            line.budget_allocated,
            line.variance,
        )
        assert line.status is budget_status(
            line.budget_allocated,
            line.realisasi,
        )
