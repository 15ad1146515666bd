"""Infrastructure destination for synchronized accounts via SQLAlchemy."""

import uuid

from sqlalchemy import text

from src.application.ports.accounts_sync import AccountsDestinationPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models.accounts import CoaAccount


CREATE_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS accurate_accounts (
    id TEXT PRIMARY KEY,
    entity_id TEXT NOT NULL,
    accurate_id TEXT,
    account_code TEXT,
    account_name TEXT,
    account_type TEXT,
    account_type_name TEXT,
    balance NUMERIC(20, 2) DEFAULT 0,
    currency TEXT DEFAULT 'IDR',
    is_parent BOOLEAN DEFAULT FALSE,
    suspended BOOLEAN DEFAULT FALSE,
    parent_id TEXT,
    lvl INTEGER DEFAULT 1,
    source_type TEXT,
    is_active BOOLEAN DEFAULT TRUE
)
"""

DELETE_ENTITY_ACCOUNTS_SQL = text(
    "DELETE FROM accurate_accounts WHERE entity_id = :entity_id"
)

INSERT_ACCOUNTS_SQL = text(
    """
    INSERT INTO accurate_accounts (
        id, entity_id, accurate_id, account_code, account_name,
        account_type, account_type_name, balance, currency, is_parent,
        suspended, parent_id, lvl, source_type, is_active
    )
    VALUES (
        :id, :entity_id, :accurate_id, :account_code, :account_name,
        :account_type, :account_type_name, :balance, :currency, :is_parent,
        :suspended, :parent_id, :lvl, :source_type, TRUE
    )
    """
)


def account_to_params(
    account: CoaAccount,
    entity_id: str,
    source_type: str,
) -> dict:
    """Map a domain account to INSERT parameters."""
    return {
        "id": account.db_id or str(uuid.uuid4()),
        "entity_id": entity_id,
        "accurate_id": str(account.id),
        "account_code": account.account_code,
        "account_name": account.account_name,
        "account_type": account.account_type,
        "account_type_name": account.account_type_name,
        "balance": account.balance,
        "currency": account.currency,
        "is_parent": account.is_parent,
        "suspended": account.suspended,
        "parent_id": (
            str(account.parent_id) if account.parent_id is not None else None
        ),
        "lvl": account.level,
        "source_type": source_type,
    }


class SqlAlchemyAccountsDestination(AccountsDestinationPort):
    """Account storage backed by SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the destination adapter.

        Args:
            db_port: Port providing access to the application engine.
        """
        self._db_port = db_port

    def prepare_destination(self) -> None:
        """Ensure the accounts table exists."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_ACCOUNTS_SQL)

    def replace_accounts(
        self,
        entity_id: str,
        accounts: list[CoaAccount],
        source_type: str,
    ) -> int:
        """Replace an entity's accounts inside one transaction.

        Args:
            entity_id: Entity whose accounts are replaced.
            accounts: Account records to store.
            source_type: Origin of the records (accurate or excel).

        Returns:
            int: Number of account records inserted.
        """
        payload = [
            account_to_params(account, entity_id, source_type)
            for account in accounts
        ]
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_ENTITY_ACCOUNTS_SQL, {"entity_id": entity_id})
            if payload:
                conn.execute(INSERT_ACCOUNTS_SQL, payload)
        return len(payload)


__all__ = [
    "SqlAlchemyAccountsDestination",
    "account_to_params",
    "CREATE_ACCOUNTS_SQL",
    "DELETE_ENTITY_ACCOUNTS_SQL",
    "INSERT_ACCOUNTS_SQL",
]
