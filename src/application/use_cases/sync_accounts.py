"""Use case for synchronizing an entity's Chart of Accounts.

The use case is source-agnostic. It:

* reads accounts from a source (Accurate API or spreadsheet);
* drops records without code and name;
* ensures the destination table exists;
* replaces the entity's stored accounts in a single transaction.
"""

from dataclasses import dataclass

from src.application.ports.accounts_sync import (
    AccountsDestinationPort,
    AccountsSourcePort,
)
from src.domain.models.accounts import CoaAccount
from src.domain.policies.account_filters import has_account_identity
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SyncAccountsResult:
    """Result of a sync_accounts run.

    Attributes:
        source_count: Number of accounts read from the source.
        inserted_count: Number of accounts written to the destination.
    """

    source_count: int
    inserted_count: int


class SyncAccountsUseCase:
    """Replace an entity's stored accounts with a source snapshot."""

    def __init__(
        self,
        source: AccountsSourcePort,
        destination: AccountsDestinationPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            source: Port providing the authoritative account set.
            destination: Port writing accounts to application storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._source = source
        self._destination = destination
        self._logger = logger or get_app_logger()

    def run(self, entity_id: str) -> SyncAccountsResult:
        """Execute the synchronization job.

        Args:
            entity_id: Entity whose accounts are refreshed.

        Returns:
            SyncAccountsResult: Summary of how many rows were processed.
        """
        source_accounts = self._source.fetch_accounts(entity_id)
        self._logger.info(
            f"Fetched {len(source_accounts)} accounts from "
            f"{self._source.source_type} for entity {entity_id}"
        )
        accounts = self._filter_accounts(source_accounts)
        self._destination.prepare_destination()
        inserted_count = self._destination.replace_accounts(
            entity_id,
            accounts,
            self._source.source_type,
        )
        self._logger.info(
            f"Stored {inserted_count} accounts for entity {entity_id}"
        )
        return SyncAccountsResult(
            source_count=len(source_accounts),
            inserted_count=inserted_count,
        )

    def _filter_accounts(
        self,
        accounts: list[CoaAccount],
    ) -> list[CoaAccount]:
        """Drop accounts without code and name.

        Args:
            accounts: Records extracted from the source.

        Returns:
            list[CoaAccount]: Records sorted by code then id.
        """
        filtered = [
            account
            for account in accounts
            if has_account_identity(
                account.account_code,
                account.account_name,
            )
        ]
        filtered = sorted(
            filtered,
            key=lambda account: (account.account_code, account.id),
        )
        filtered_count = len(accounts) - len(filtered)
        if filtered_count:
            self._logger.warning(
                f"Filtered out {filtered_count} accounts without code or name"
            )
        return filtered


__all__ = ["SyncAccountsUseCase", "SyncAccountsResult"]
