"""Port for reading and maintaining an entity's stored accounts."""

from typing import Protocol

from src.domain.models.accounts import AccountEdit, CoaAccount


class AccountsRepositoryPort(Protocol):
    """Port exposing access to stored Chart-of-Accounts records."""

    def fetch_accounts(self, entity_id: str) -> list[CoaAccount]:
        """Return the active accounts of an entity ordered by code."""

    def update_account(self, db_id: str, edit: AccountEdit) -> int:
        """Apply edited fields to one stored account and return the count."""

    def delete_account(self, db_id: str) -> int:
        """Delete one stored account and return the affected row count."""

    def delete_all_accounts(self, entity_id: str) -> int:
        """Delete every account of an entity and return the row count."""


__all__ = ["AccountsRepositoryPort"]
