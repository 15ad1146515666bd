"""Use case for editing a stored account."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.domain.models.accounts import AccountEdit
from src.domain.services.normalization import normalize_currency
from src.infrastructure.logging.logger import get_app_logger


class EditAccountUseCase:
    """Validate and store edits to one Chart-of-Accounts record."""

    def __init__(
        self,
        repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, db_id: str, edit: AccountEdit) -> bool:
        """Apply the edit to a stored account.

        Code, name and type are stripped and the currency is upper-cased
        before writing. The hierarchy fields (parent, level, balance) are
        not editable here; they only change through a sync or import.

        Args:
            db_id: Storage identifier of the account row.
            edit: New values for the editable fields.

        Returns:
            bool: True when a row was updated.

        Raises:
            ValueError: If the account code or name is blank.
        """
        cleaned = AccountEdit(
            account_code=edit.account_code.strip(),
            account_name=edit.account_name.strip(),
            account_type=edit.account_type.strip() or "UNKNOWN",
            currency=normalize_currency(edit.currency),
        )
        if not cleaned.account_code:
            raise ValueError("Account code must not be empty")
        if not cleaned.account_name:
            raise ValueError("Account name must not be empty")

        updated = self._repository.update_account(db_id, cleaned)
        if not updated:
            self._logger.warning(f"No stored account found for id {db_id}")
            return False
        self._logger.info(
            f"Updated account {db_id} to {cleaned.account_code} "
            f"{cleaned.account_name}"
        )
        return True


__all__ = ["EditAccountUseCase"]
