"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal

import altair as alt
import streamlit as st

from src.application.use_cases.delete_accounts import DeleteAccountsUseCase
from src.application.use_cases.edit_account import EditAccountUseCase
from src.application.use_cases.get_accounts_tree import (
    AccountsTreeView,
    build_accounts_tree_view,
)
from src.application.use_cases.get_budget_realization import (
    BudgetRealizationView,
    GetBudgetRealizationUseCase,
)
from src.application.use_cases.manage_entities import ManageEntitiesUseCase
from src.application.use_cases.sync_accounts import SyncAccountsUseCase
from src.domain.models.accounts import (
    AccountEdit,
    AccountTreeRow,
    CoaAccount,
    Entity,
)
from src.domain.models.budget import BudgetGroup, BudgetStatus
from src.domain.services.account_hierarchy import toggle_expanded
from src.infrastructure.accurate_source import AccurateAccountsSource
from src.infrastructure.container import (
    build_accounts_destination,
    build_accounts_repository,
    build_accounts_source,
    build_budget_repository,
    build_database_adapter,
    build_entities_repository,
)
from src.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from src.infrastructure.spreadsheet_export import (
    export_accounts_tree,
    export_budget_realization,
)
from src.infrastructure.spreadsheet_source import SpreadsheetAccountsSource


PAGES = ["Chart of Accounts", "Budget vs Realisasi", "Entitas"]
ALL_OPTION = "All"
_INDENT = "  "
XLSX_MIME = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)


def _fetch_entities() -> Sequence[Entity]:
    """Fetch entities from the application database."""
    repository = build_entities_repository(build_database_adapter())
    return repository.fetch_entities()


@st.cache_data(show_spinner=False)
def _load_entities() -> Sequence[Entity]:
    """Cached wrapper around _fetch_entities for Streamlit sessions."""
    return _fetch_entities()


def _fetch_accounts(entity_id: str) -> list[CoaAccount]:
    """Fetch the stored accounts of an entity."""
    repository = build_accounts_repository(build_database_adapter())
    return repository.fetch_accounts(entity_id)


@st.cache_data(show_spinner=False)
def _load_accounts(entity_id: str) -> list[CoaAccount]:
    """Cached wrapper around _fetch_accounts.

    One snapshot per entity; expanding or collapsing rows never re-reads
    the database.
    """
    return _fetch_accounts(entity_id)


def _build_accounts_tree(entity_id: str) -> AccountsTreeView:
    """Build the tree of the cached snapshot for the session's expansion."""
    return build_accounts_tree_view(
        _load_accounts(entity_id),
        _get_expanded(entity_id),
        logger=get_app_logger(),
    )


def _fetch_budget_realization(
    entity: Entity,
    period: str | None,
    account_type: str | None,
    budget_group: str | None,
    search: str | None,
) -> BudgetRealizationView:
    """Fetch budget versus realisation figures for an entity."""
    repository = build_budget_repository(build_database_adapter())
    use_case = GetBudgetRealizationUseCase(repository=repository)
    return use_case.execute(
        entity,
        period=period,
        account_type=account_type,
        budget_group=budget_group,
        search=search,
    )


@st.cache_data(show_spinner=False)
def _load_budget_realization(
    entity: Entity,
    period: str | None,
    account_type: str | None,
    budget_group: str | None,
    search: str | None,
) -> BudgetRealizationView:
    """Cached wrapper around _fetch_budget_realization."""
    return _fetch_budget_realization(
        entity,
        period,
        account_type,
        budget_group,
        search,
    )


def _format_amount(value: Decimal) -> str:
    """Format amounts with Indonesian separators (1.234.567,89)."""
    formatted = f"{value:,.2f}"
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return f"{currency_code} {_format_amount(value)}"


def _format_percent(value: Decimal) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def _expanded_key(entity_id: str) -> str:
    return f"expanded_accounts_{entity_id}"


def _get_expanded(entity_id: str) -> frozenset[int]:
    """Return the expanded parents of the current session."""
    return st.session_state.get(_expanded_key(entity_id), frozenset())


def _toggle_account(entity_id: str, account_id: int) -> None:
    """Flip an account's expanded state for the current session."""
    key = _expanded_key(entity_id)
    st.session_state[key] = toggle_expanded(
        st.session_state.get(key, frozenset()),
        account_id,
    )


def _indented(text: str, level: int) -> str:
    return f"{_INDENT * (max(level, 1) - 1)}{text}"


def _build_tree_table(rows: Sequence[AccountTreeRow]) -> list[dict[str, str]]:
    """Return table records for visible rows."""
    data = []
    for row in rows:
        account = row.account
        marker = ""
        if row.has_children:
            marker = "▾ " if row.expanded else "▸ "
        data.append(
            {
                "Kode Akun": _indented(
                    f"{marker}{account.account_code}",
                    account.level,
                ),
                "Nama Akun": _indented(account.account_name, account.level),
                "Tipe": account.account_type_name,
                "Saldo": _format_currency(
                    row.displayed_balance,
                    account.currency,
                ),
                "Status": "Suspended" if account.suspended else "Aktif",
            }
        )
    return data


def _render_accounts_tree(entity: Entity, view: AccountsTreeView) -> None:
    """Render the expandable accounts table."""
    visible = view.visible_rows
    st.caption(
        f"{len(visible)} of {len(view.rows)} accounts shown, "
        f"{view.active_count} aktif"
    )
    st.dataframe(
        _build_tree_table(visible),
        width="stretch",
        hide_index=True,
        height=480,
    )
    parents = [row for row in visible if row.has_children]
    if not parents:
        return
    st.markdown("**Expand / collapse**")
    columns = st.columns(4)
    for index, row in enumerate(parents):
        marker = "▾" if row.expanded else "▸"
        label = f"{marker} {row.account.account_code}"
        columns[index % 4].button(
            label,
            key=f"toggle-{entity.id}-{row.account.id}",
            on_click=_toggle_account,
            args=(entity.id, row.account.id),
        )


def _run_sync(entity: Entity, source) -> None:
    """Run a synchronization and report the outcome."""
    use_case = SyncAccountsUseCase(
        source=source,
        destination=build_accounts_destination(build_database_adapter()),
    )
    try:
        result = use_case.run(entity.id)
    except (RuntimeError, ValueError) as exc:
        st.error(f"Gagal mengambil COA: {exc}")
        return
    st.cache_data.clear()
    st.success(f"Berhasil sync {result.inserted_count} akun COA")


def _render_coa_actions(entity: Entity) -> None:
    """Render refresh, sync, import and delete actions."""
    refresh_col, sync_col, delete_col = st.columns(3)
    if refresh_col.button("Refresh"):
        st.cache_data.clear()
        st.success("Data COA berhasil di-refresh!")
    if sync_col.button("Tarik dari Accurate API"):
        try:
            source = build_accounts_source(entity)
        except RuntimeError as exc:
            st.error(str(exc))
        else:
            if not isinstance(source, AccurateAccountsSource):
                st.warning("COA_SOURCE is not set to accurate.")
            else:
                _run_sync(entity, source)
    if delete_col.button("Delete All COA"):
        use_case = DeleteAccountsUseCase(
            build_accounts_repository(build_database_adapter())
        )
        deleted = use_case.delete_all(entity.id)
        st.session_state.pop(_expanded_key(entity.id), None)
        st.cache_data.clear()
        st.success(f"Berhasil menghapus {deleted} akun COA!")

    uploaded = st.file_uploader("Import dari Excel", type=["xlsx"])
    if uploaded is not None and st.button("Import"):
        _run_sync(entity, SpreadsheetAccountsSource(uploaded))


def _render_coa_page(entity: Entity) -> None:
    """Render the Chart of Accounts page."""
    st.subheader("Chart of Accounts")
    _render_coa_actions(entity)
    view = _build_accounts_tree(entity.id)
    if not view.rows:
        st.warning(
            "Belum ada data COA. Tarik dari Accurate atau import dari Excel."
        )
        return
    _render_accounts_tree(entity, view)
    st.download_button(
        "Export COA ke Excel",
        data=export_accounts_tree(entity, view.rows),
        file_name=f"COA_{entity.entity_name.replace(' ', '_')}.xlsx",
        mime=XLSX_MIME,
    )
    stored = _stored_accounts(view)
    if stored:
        _render_edit_account(stored)
        _render_delete_account(stored)


def _stored_accounts(view: AccountsTreeView) -> dict[str, CoaAccount]:
    """Return stored accounts keyed by their selector label."""
    return {
        f"{row.account.account_code} - {row.account.account_name}": (
            row.account
        )
        for row in view.rows
        if row.account.db_id
    }


def _render_edit_account(stored: dict[str, CoaAccount]) -> None:
    """Render the account edit form."""
    with st.expander("Edit akun"):
        label = st.selectbox("Akun", list(stored), key="edit-account")
        account = stored[label]
        edit = AccountEdit(
            account_code=st.text_input(
                "Kode Akun",
                value=account.account_code,
                key=f"edit-code-{account.db_id}",
            ),
            account_name=st.text_input(
                "Nama Akun",
                value=account.account_name,
                key=f"edit-name-{account.db_id}",
            ),
            account_type=st.text_input(
                "Tipe Akun",
                value=account.account_type,
                key=f"edit-type-{account.db_id}",
            ),
            currency=st.text_input(
                "Mata Uang",
                value=account.currency,
                key=f"edit-currency-{account.db_id}",
            ),
        )
        if not st.button("Simpan perubahan"):
            return
        use_case = EditAccountUseCase(
            build_accounts_repository(build_database_adapter())
        )
        try:
            updated = use_case.execute(account.db_id, edit)
        except ValueError as exc:
            st.error(f"Gagal mengedit: {exc}")
            return
        if updated:
            st.cache_data.clear()
            st.success("Account berhasil diupdate")
        else:
            st.warning("Akun tidak ditemukan.")


def _render_delete_account(stored: dict[str, CoaAccount]) -> None:
    """Render the single-account delete form."""
    with st.expander("Hapus akun"):
        label = st.selectbox("Akun", list(stored), key="delete-account")
        if st.button("Hapus"):
            use_case = DeleteAccountsUseCase(
                build_accounts_repository(build_database_adapter())
            )
            if use_case.delete_account(stored[label].db_id):
                st.cache_data.clear()
                st.success("Akun COA berhasil dihapus!")
            else:
                st.warning("Akun tidak ditemukan.")


def _prepare_budget_chart_data(
    groups: Sequence[BudgetGroup],
) -> list[dict[str, str | float]]:
    """Return Altair-ready rows with budget and realisation per group."""
    data: list[dict[str, str | float]] = []
    for group in groups:
        label = f"{group.budget_group_name} ({group.period})"
        for kind, amount in (
            ("Budget", group.total_budget),
            ("Realisasi", group.total_realisasi),
        ):
            data.append(
                {
                    "group": label,
                    "kind": kind,
                    "amount": float(amount),
                    "amount_label": _format_amount(amount),
                }
            )
    return data


def _render_budget_chart(groups: Sequence[BudgetGroup]) -> None:
    """Render grouped bars of budget versus realisation."""
    if not groups:
        st.info("No budget groups match the filters.")
        return
    chart = alt.Chart(
        alt.Data(values=_prepare_budget_chart_data(groups))
    ).mark_bar(cornerRadius=4).encode(
        x=alt.X("group:N", title=None),
        xOffset=alt.XOffset("kind:N"),
        y=alt.Y("amount:Q", title="Amount"),
        color=alt.Color(
            "kind:N",
            scale=alt.Scale(range=["#1b9aaa", "#f4a261"]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("group:N"),
            alt.Tooltip("kind:N"),
            alt.Tooltip("amount_label:N"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _build_groups_table(
    groups: Sequence[BudgetGroup],
    currency_code: str,
) -> list[dict[str, str]]:
    return [
        {
            "Budget Group": group.budget_group_name,
            "Periode": group.period,
            "Budget": _format_currency(group.total_budget, currency_code),
            "Realisasi": _format_currency(
                group.total_realisasi,
                currency_code,
            ),
            "Selisih": _format_currency(group.total_variance, currency_code),
            "%": _format_percent(group.variance_percentage),
            "Status": (
                "On Track"
                if group.status is BudgetStatus.ON_TRACK
                else "Over Budget"
            ),
            "Akun": str(len(group.accounts)),
        }
        for group in groups
    ]


def _option(value: str) -> str | None:
    return None if value == ALL_OPTION else value


def _render_budget_page(entity: Entity) -> None:
    """Render the budget versus realisation page."""
    st.subheader("Budget vs Realisasi")
    options = _load_budget_realization(entity, None, None, None, None)
    period_col, type_col, group_col = st.columns(3)
    period = period_col.selectbox(
        "Periode",
        [ALL_OPTION] + options.periods,
    )
    account_type = type_col.selectbox(
        "Tipe Akun",
        [ALL_OPTION] + options.account_types,
    )
    budget_group = group_col.selectbox(
        "Budget Group",
        [ALL_OPTION] + options.budget_groups,
    )
    search = st.text_input("Cari nama budget group", placeholder="Cari...")

    view = _load_budget_realization(
        entity,
        _option(period),
        _option(account_type),
        _option(budget_group),
        search or None,
    )
    summary = view.summary
    if summary is None:
        st.warning("Belum ada data budget untuk entitas ini.")
        return

    currency_code = "IDR"
    budget_col, realisasi_col, variance_col = st.columns(3)
    budget_col.metric(
        "Total Budget",
        _format_currency(summary.total_budget, currency_code),
    )
    realisasi_col.metric(
        "Total Realisasi",
        _format_currency(summary.total_realisasi, currency_code),
    )
    variance_col.metric(
        "Over Budget"
        if summary.overall_status is BudgetStatus.OVER_BUDGET
        else "Sisa Budget",
        _format_currency(summary.total_variance, currency_code),
        _format_percent(summary.variance_percentage),
    )
    st.caption(
        f"{summary.on_track_count} on track, "
        f"{summary.over_budget_count} over budget, "
        f"{summary.total_budgets} budgets"
    )
    st.caption(
        f"Menampilkan {len(view.groups)} budget group"
    )
    _render_budget_chart(view.groups)
    st.dataframe(
        _build_groups_table(view.groups, currency_code),
        width="stretch",
        hide_index=True,
    )
    st.download_button(
        "Export ke Excel",
        data=export_budget_realization(entity, summary, view.groups),
        file_name=f"Budget_Realization_{summary.period}.xlsx",
        mime=XLSX_MIME,
    )


def _save_entity(entity_id: str | None, name: str, api_token: str) -> None:
    """Create or update an entity and report the outcome."""
    use_case = ManageEntitiesUseCase(
        build_entities_repository(build_database_adapter())
    )
    try:
        if entity_id is None:
            use_case.create(name, api_token)
            message = "Entitas berhasil ditambahkan"
        elif use_case.update(entity_id, name, api_token):
            message = "Entitas berhasil diubah"
        else:
            st.warning("Entitas tidak ditemukan.")
            return
    except ValueError as exc:
        st.error(f"Gagal menyimpan entitas: {exc}")
        return
    st.cache_data.clear()
    st.success(message)


def _render_entity_form(entity: Entity | None) -> None:
    """Render the create form, or the edit form for ``entity``."""
    suffix = entity.id if entity is not None else "new"
    name = st.text_input(
        "Nama Entitas",
        value=entity.entity_name if entity is not None else "",
        key=f"entity-name-{suffix}",
    )
    api_token = st.text_input(
        "API Token",
        value=(entity.api_token or "") if entity is not None else "",
        type="password",
        key=f"entity-token-{suffix}",
    )
    label = "Tambah entitas" if entity is None else "Update entitas"
    if st.button(label):
        _save_entity(
            entity.id if entity is not None else None,
            name,
            api_token,
        )


def _render_entities_page(
    entity: Entity,
    entities: Sequence[Entity],
) -> None:
    """Render the entity list with create and edit forms."""
    st.subheader("Entitas")
    st.dataframe(
        [
            {
                "ID": item.id,
                "Nama Entitas": item.entity_name,
                "API Token": "Terisi" if item.api_token else "-",
            }
            for item in entities
        ],
        width="stretch",
        hide_index=True,
    )
    with st.expander(f"Edit {entity.entity_name}"):
        _render_entity_form(entity)
    with st.expander("Tambah entitas baru"):
        _render_entity_form(None)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="COA Budget Dashboard", layout="wide")
    st.title("COA Budget Dashboard")

    entities = _load_entities()
    if not entities:
        st.warning("Belum ada entitas. Tambahkan entitas terlebih dahulu.")
        _render_entity_form(None)
        return

    by_id = {entity.id: entity for entity in entities}
    entity_id = st.sidebar.selectbox(
        "Entitas",
        list(by_id),
        format_func=lambda key: by_id[key].entity_name,
    )
    entity = by_id[entity_id]
    page = st.sidebar.selectbox("Page", PAGES)
    get_usage_logger().info(f"page={page} entity={entity.id}")

    if page == PAGES[0]:
        _render_coa_page(entity)
    elif page == PAGES[1]:
        _render_budget_page(entity)
    else:
        _render_entities_page(entity, entities)


if __name__ == "__main__":  # pragma: no cover
    main()
