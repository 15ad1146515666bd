"""Excel exports of the accounts tree and budget realisation."""

import io
from collections.abc import Sequence
from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from src.domain.models.accounts import AccountTreeRow, Entity
from src.domain.models.budget import (
    BudgetGroup,
    BudgetStatus,
    RealizationSummary,
)


ACCOUNTS_HEADER = [
    "No",
    "Kode Akun",
    "Nama Akun",
    "Tipe Akun",
    "Level",
    "Saldo",
    "Mata Uang",
    "Status",
]

BUDGET_HEADER = [
    "No",
    "Budget Group",
    "Periode",
    "Kode Akun",
    "Nama Akun",
    "Tipe Akun",
    "Budget (Rp)",
    "Realisasi (Rp)",
    "Variance (Rp)",
    "Variance (%)",
    "Status",
]

_HEADER_FILL = PatternFill(
    start_color="4472C4",
    end_color="4472C4",
    fill_type="solid",
)
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_TITLE_FONT = Font(bold=True, size=14)
_AMOUNT_FORMAT = "#,##0.00"
_MAX_WIDTH = 60


def _status_label(status: BudgetStatus) -> str:
    return "On Track" if status is BudgetStatus.ON_TRACK else "Over Budget"


def _write_header_block(
    sheet: Worksheet,
    title: str,
    details: Sequence[tuple[str, object]],
) -> None:
    sheet.append([title])
    sheet["A1"].font = _TITLE_FONT
    sheet.append([])
    for label, value in details:
        sheet.append([label, value])
    sheet.append([])


def _write_table_header(sheet: Worksheet, header: Sequence[str]) -> None:
    sheet.append(list(header))
    for cell in sheet[sheet.max_row]:
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")


def _fit_columns(sheet: Worksheet) -> None:
    for column in sheet.columns:
        longest = max(
            (
                len(str(cell.value))
                for cell in column
                if cell.value is not None
            ),
            default=0,
        )
        letter = column[0].column_letter
        sheet.column_dimensions[letter].width = min(longest + 2, _MAX_WIDTH)


def _to_bytes(workbook: Workbook) -> bytes:
    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def export_accounts_tree(
    entity: Entity,
    rows: Sequence[AccountTreeRow],
    exported_at: datetime | None = None,
) -> bytes:
    """Return an .xlsx workbook listing every account in tree order.

    Balances are the displayed (rolled-up) balances. Names are indented
    by depth so the hierarchy stays readable without the dashboard.

    Args:
        entity: Entity the accounts belong to.
        rows: Tree rows, typically ``AccountsTreeView.rows``.
        exported_at: Timestamp written in the header block.

    Returns:
        bytes: Workbook content.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Chart of Accounts"
    stamp = exported_at or datetime.now()
    _write_header_block(
        sheet,
        "CHART OF ACCOUNTS",
        [
            ("Entitas", entity.entity_name),
            ("Tanggal Export", stamp.strftime("%d/%m/%Y %H:%M")),
            ("Jumlah Akun", len(rows)),
        ],
    )
    _write_table_header(sheet, ACCOUNTS_HEADER)
    for index, row in enumerate(rows, start=1):
        account = row.account
        sheet.append(
            [
                index,
                account.account_code,
                f"{'  ' * row.depth}{account.account_name}",
                account.account_type_name,
                account.level,
                row.displayed_balance,
                account.currency,
                "Suspended" if account.suspended else "Aktif",
            ]
        )
        sheet.cell(row=sheet.max_row, column=6).number_format = _AMOUNT_FORMAT
    _fit_columns(sheet)
    return _to_bytes(workbook)


def export_budget_realization(
    entity: Entity,
    summary: RealizationSummary,
    groups: Sequence[BudgetGroup],
    exported_at: datetime | None = None,
) -> bytes:
    """Return an .xlsx workbook with the summary and every budget line.

    Args:
        entity: Entity the budgets belong to.
        summary: Headline figures for the filtered lines.
        groups: Budget groups whose lines are listed.
        exported_at: Timestamp written in the header block.

    Returns:
        bytes: Workbook content.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Budget Realization"
    stamp = exported_at or datetime.now()
    _write_header_block(
        sheet,
        "LAPORAN BUDGET VS REALISASI",
        [
            ("Entitas", entity.entity_name),
            ("Periode", summary.period),
            ("Tanggal Export", stamp.strftime("%d/%m/%Y %H:%M")),
            ("Total Budget", summary.total_budget),
            ("Total Realisasi", summary.total_realisasi),
            ("Total Variance", summary.total_variance),
            ("Variance %", f"{summary.variance_percentage:.2f}%"),
            ("Status", _status_label(summary.overall_status)),
            ("Jumlah Akun", summary.total_accounts),
        ],
    )
    _write_table_header(sheet, BUDGET_HEADER)
    index = 0
    for group in groups:
        for line in group.accounts:
            index += 1
            sheet.append(
                [
                    index,
                    group.budget_group_name,
                    group.period,
                    line.account_code,
                    line.account_name,
                    line.account_type or "-",
                    line.budget_allocated,
                    line.realisasi,
                    line.variance,
                    f"{line.variance_percentage:.2f}%",
                    _status_label(line.status),
                ]
            )
            for column in (7, 8, 9):
                sheet.cell(
                    row=sheet.max_row,
                    column=column,
                ).number_format = _AMOUNT_FORMAT
    _fit_columns(sheet)
    return _to_bytes(workbook)


__all__ = [
    "ACCOUNTS_HEADER",
    "BUDGET_HEADER",
    "export_accounts_tree",
    "export_budget_realization",
]
