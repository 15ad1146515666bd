"""Ports for synchronizing account data into application storage."""

from typing import Protocol

from src.domain.models.accounts import CoaAccount


class AccountsSourcePort(Protocol):
    """Port exposing read access to an authoritative account set."""

    source_type: str

    def fetch_accounts(self, entity_id: str) -> list[CoaAccount]:
        """Return all source accounts of an entity."""


class AccountsDestinationPort(Protocol):
    """Port exposing write access to application account storage."""

    def prepare_destination(self) -> None:
        """Ensure the destination is ready to receive data."""

    def replace_accounts(
        self,
        entity_id: str,
        accounts: list[CoaAccount],
        source_type: str,
    ) -> int:
        """Atomically replace an entity's accounts with the given set."""


__all__ = [
    "AccountsSourcePort",
    "AccountsDestinationPort",
]
