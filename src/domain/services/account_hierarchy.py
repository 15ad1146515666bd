"""Balance roll-up and expand/collapse visibility over a flat account list.

The hierarchy is encoded through ``parent_id`` back-references. An
``AccountHierarchy`` indexes one snapshot of an entity's accounts so both
queries run without rescanning the list:

* ``displayed_balance``: own balance for leaves, sum of leaf descendants
  for parents;
* ``is_visible``: roots always, children only when every ancestor is
  expanded.

Broken data never raises. Dangling and self-referential parents make an
account a root, and a parent without children totals zero. A parent cycle
is cut once while indexing: its member with the lowest id becomes a root,
so every query sees the same forest. Anomalies are reported once per
snapshot through the logger.
"""

from collections.abc import Collection, Iterable
from decimal import Decimal

from src.domain.models.accounts import AccountTreeRow, CoaAccount


_ZERO = Decimal("0")


class AccountHierarchy:
    """Identifier-indexed view of one account snapshot."""

    def __init__(
        self,
        accounts: Iterable[CoaAccount],
        logger=None,
    ) -> None:
        """Index the accounts.

        Args:
            accounts: Flat account set for a single entity.
            logger: Optional logger used to report data anomalies.
        """
        self._logger = logger
        self._accounts: dict[int, CoaAccount] = {}
        duplicates = 0
        for account in accounts:
            if account.id in self._accounts:
                duplicates += 1
            self._accounts[account.id] = account

        self._cycle_roots: set[int] = set()
        self._children: dict[int, list[int]] = {}
        self._roots: list[int] = []
        dangling = 0
        self_referencing = 0
        for account in self._accounts.values():
            if account.parent_id == account.id:
                self_referencing += 1
            elif (
                account.parent_id is not None
                and account.parent_id not in self._accounts
            ):
                dangling += 1
            parent_id = self.resolve_parent_id(account)
            if parent_id is None:
                self._roots.append(account.id)
            else:
                self._children.setdefault(parent_id, []).append(account.id)

        cycles = self._cut_cycles()
        for child_ids in self._children.values():
            child_ids.sort(key=self._sort_key)
        self._roots.sort(key=self._sort_key)

        self._totals: dict[int, Decimal] = {}
        self._report_anomalies(duplicates, dangling, self_referencing, cycles)

    def resolve_parent_id(self, account: CoaAccount) -> int | None:
        """Return the parent identifier, or None when the account is a root.

        Missing, self-referential and unresolvable parents all count as
        "no parent", as does the back reference that closes a cycle.
        """
        parent_id = account.parent_id
        if parent_id is None or parent_id == account.id:
            return None
        if parent_id not in self._accounts:
            return None
        if account.id in self._cycle_roots:
            return None
        return parent_id

    def children_of(self, account_id: int) -> list[CoaAccount]:
        """Return direct children ordered by account code."""
        return [
            self._accounts[child_id]
            for child_id in self._children.get(account_id, ())
        ]

    def displayed_balance(self, account: CoaAccount) -> Decimal:
        """Return the balance shown for the account.

        Leaves report their own balance. Parents report the sum of leaf
        balances below them; balances stored on intermediate parents are
        ignored.

        Args:
            account: Target account.

        Returns:
            Decimal: Own or rolled-up balance.
        """
        if not account.is_parent:
            return account.balance
        if self._accounts.get(account.id) != account:
            # Not part of this snapshot; aggregate its indexed children.
            return sum(
                (
                    self.displayed_balance(child)
                    for child in self.children_of(account.id)
                ),
                start=_ZERO,
            )
        if account.id not in self._totals:
            self._roll_up(account.id)
        return self._totals[account.id]

    def is_visible(
        self,
        account: CoaAccount,
        expanded: Collection[int],
    ) -> bool:
        """Return True when every ancestor of the account is expanded.

        Args:
            account: Target account.
            expanded: Identifiers of currently expanded parents.

        Returns:
            bool: Visibility of the account.
        """
        seen = {account.id}
        current = account
        while True:
            parent_id = self.resolve_parent_id(current)
            if parent_id is None or parent_id in seen:
                return True
            if parent_id not in expanded:
                return False
            seen.add(parent_id)
            current = self._accounts[parent_id]

    def visible_accounts(
        self,
        expanded: Collection[int],
    ) -> list[CoaAccount]:
        """Return visible accounts in tree order."""
        return [
            row.account
            for row in self.tree_rows(expanded)
            if row.visible
        ]

    def tree_rows(self, expanded: Collection[int]) -> list[AccountTreeRow]:
        """Return every account as a display row in depth-first order.

        Args:
            expanded: Identifiers of currently expanded parents.

        Returns:
            list[AccountTreeRow]: Rows with balance, depth and visibility.
        """
        rows: list[AccountTreeRow] = []
        for root_id in self._roots:
            self._emit_subtree(root_id, expanded, rows)
        return rows

    def _emit_subtree(
        self,
        start_id: int,
        expanded: Collection[int],
        rows: list[AccountTreeRow],
    ) -> None:
        stack = [(start_id, 0)]
        while stack:
            account_id, depth = stack.pop()
            account = self._accounts[account_id]
            child_ids = self._children.get(account_id, [])
            rows.append(
                AccountTreeRow(
                    account=account,
                    displayed_balance=self.displayed_balance(account),
                    depth=depth,
                    visible=self.is_visible(account, expanded),
                    expanded=account_id in expanded,
                    has_children=bool(child_ids),
                )
            )
            for child_id in reversed(child_ids):
                stack.append((child_id, depth + 1))

    def _cut_cycles(self) -> int:
        """Promote the lowest id of every parent cycle to a root.

        Accounts not reachable from a root sit on, or below, a cycle.
        Walking parents from such an account always ends on the cycle.

        Returns:
            int: Number of cycles cut.
        """
        reachable = self._descendants(self._roots)
        cycles = 0
        for account_id in sorted(self._accounts):
            if account_id in reachable:
                continue
            path: list[int] = []
            position: dict[int, int] = {}
            current = account_id
            while current not in position:
                position[current] = len(path)
                path.append(current)
                current = self.resolve_parent_id(self._accounts[current])
            cut_id = min(path[position[current]:])
            parent_id = self.resolve_parent_id(self._accounts[cut_id])
            self._children[parent_id].remove(cut_id)
            self._cycle_roots.add(cut_id)
            self._roots.append(cut_id)
            reachable |= self._descendants([cut_id])
            cycles += 1
        return cycles

    def _descendants(self, start_ids: Iterable[int]) -> set[int]:
        """Return the start ids and everything below them."""
        found: set[int] = set()
        stack = list(start_ids)
        while stack:
            account_id = stack.pop()
            if account_id in found:
                continue
            found.add(account_id)
            stack.extend(self._children.get(account_id, ()))
        return found

    def _roll_up(self, start_id: int) -> None:
        """Compute totals below ``start_id`` with an iterative post-order."""
        stack = [(start_id, False)]
        while stack:
            account_id, children_done = stack.pop()
            if account_id in self._totals:
                continue
            account = self._accounts[account_id]
            if not account.is_parent:
                self._totals[account_id] = account.balance
                continue
            child_ids = self._children.get(account_id, ())
            if children_done:
                self._totals[account_id] = sum(
                    (self._totals[child_id] for child_id in child_ids),
                    start=_ZERO,
                )
                continue
            stack.append((account_id, True))
            stack.extend(
                (child_id, False)
                for child_id in child_ids
                if child_id not in self._totals
            )

    def _sort_key(self, account_id: int) -> tuple[str, int]:
        return (self._accounts[account_id].account_code, account_id)

    def _report_anomalies(
        self,
        duplicates: int,
        dangling: int,
        self_referencing: int,
        cycles: int,
    ) -> None:
        if duplicates:
            self._warn(
                f"{duplicates} duplicate account ids; the last record wins"
            )
        if dangling:
            self._warn(
                f"{dangling} accounts reference a missing parent and are "
                "shown as root accounts"
            )
        if self_referencing:
            self._warn(
                f"{self_referencing} accounts reference themselves as "
                "parent and are shown as root accounts"
            )
        if cycles:
            self._warn(
                f"{cycles} parent cycles cut; their lowest account ids are "
                "shown as root accounts"
            )
        childless = sum(
            1
            for account in self._accounts.values()
            if account.is_parent and not self._children.get(account.id)
        )
        if childless:
            self._warn(
                f"{childless} parent accounts have no children and total zero"
            )

    def _warn(self, message: str) -> None:
        if self._logger is not None:
            self._logger.warning(message)


def displayed_balance(
    account: CoaAccount,
    accounts: Iterable[CoaAccount],
) -> Decimal:
    """Return the displayed balance of ``account`` within ``accounts``."""
    return AccountHierarchy(accounts).displayed_balance(account)


def is_visible(
    account: CoaAccount,
    accounts: Iterable[CoaAccount],
    expanded: Collection[int],
) -> bool:
    """Return whether ``account`` is visible given the expanded parents."""
    return AccountHierarchy(accounts).is_visible(account, expanded)


def toggle_expanded(
    expanded: Collection[int],
    account_id: int,
) -> frozenset[int]:
    """Return a new expanded set with ``account_id`` membership flipped."""
    current = frozenset(expanded)
    if account_id in current:
        return current - {account_id}
    return current | {account_id}


__all__ = [
    "AccountHierarchy",
    "displayed_balance",
    "is_visible",
    "toggle_expanded",
]
