"""Use case to read an entity's accounts as an expandable tree."""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.domain.models.accounts import AccountTreeRow, CoaAccount
from src.domain.services.account_hierarchy import AccountHierarchy
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AccountsTreeView:
    """Accounts tree prepared for the presentation layer.

    Attributes:
        rows: Every account in depth-first order.
        active_count: Number of accounts that are not suspended.
    """

    rows: list[AccountTreeRow]
    active_count: int

    @property
    def visible_rows(self) -> list[AccountTreeRow]:
        """Return rows whose ancestors are all expanded."""
        return [row for row in self.rows if row.visible]

    @property
    def parent_ids(self) -> list[int]:
        """Return identifiers of rows that can be expanded."""
        return [row.account.id for row in self.rows if row.has_children]


def build_accounts_tree_view(
    accounts: Sequence[CoaAccount],
    expanded: Collection[int] = frozenset(),
    logger=None,
) -> AccountsTreeView:
    """Return the tree view of an already fetched account snapshot.

    Args:
        accounts: Every account of one entity.
        expanded: Identifiers of parents currently expanded.
        logger: Optional logger receiving data anomaly warnings.

    Returns:
        AccountsTreeView: Rows with displayed balances and visibility.
    """
    hierarchy = AccountHierarchy(accounts, logger=logger)
    return AccountsTreeView(
        rows=hierarchy.tree_rows(expanded),
        active_count=sum(1 for account in accounts if not account.suspended),
    )


class GetAccountsTreeUseCase:
    """Fetch an entity's accounts and compute balances and visibility."""

    def __init__(
        self,
        repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing stored accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        entity_id: str,
        expanded: Collection[int] = frozenset(),
    ) -> AccountsTreeView:
        """Return the accounts tree of an entity.

        Args:
            entity_id: Entity whose accounts are displayed.
            expanded: Identifiers of parents currently expanded.

        Returns:
            AccountsTreeView: Rows with displayed balances and visibility.
        """
        accounts = self._repository.fetch_accounts(entity_id)
        view = build_accounts_tree_view(
            accounts,
            expanded,
            logger=self._logger,
        )
        self._logger.info(
            f"Built accounts tree for entity {entity_id}: "
            f"{len(view.rows)} accounts, {len(expanded)} expanded"
        )
        return view


__all__ = [
    "GetAccountsTreeUseCase",
    "AccountsTreeView",
    "build_accounts_tree_view",
]
