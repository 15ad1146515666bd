"""Use case for removing stored accounts."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.infrastructure.logging.logger import get_app_logger


class DeleteAccountsUseCase:
    """Delete one account or an entity's whole Chart of Accounts."""

    def __init__(
        self,
        repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def delete_account(self, db_id: str) -> bool:
        """Delete a stored account.

        Args:
            db_id: Storage identifier of the account row.

        Returns:
            bool: True when a row was removed.
        """
        deleted = self._repository.delete_account(db_id)
        if not deleted:
            self._logger.warning(f"No stored account found for id {db_id}")
            return False
        self._logger.info(f"Deleted account {db_id}")
        return True

    def delete_all(self, entity_id: str) -> int:
        """Delete every account of an entity and return how many went."""
        deleted = self._repository.delete_all_accounts(entity_id)
        self._logger.info(
            f"Deleted {deleted} accounts for entity {entity_id}"
        )
        return deleted


__all__ = ["DeleteAccountsUseCase"]
