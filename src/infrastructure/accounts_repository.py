"""SQLAlchemy-backed repository for stored Chart-of-Accounts records."""

from sqlalchemy import text

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models.accounts import AccountEdit, CoaAccount
from src.domain.services.normalization import (
    normalize_currency,
    normalize_flag,
    normalize_level,
    normalize_optional_id,
    normalize_text,
)
from src.utils.decimal_utils import coerce_decimal


SELECT_ACCOUNTS_SQL = text(
    """
    SELECT id, accurate_id, account_code, account_name, account_type,
           account_type_name, balance, currency, is_parent, suspended,
           parent_id, lvl
    FROM accurate_accounts
    WHERE entity_id = :entity_id AND is_active = TRUE
    ORDER BY account_code
    """
)

UPDATE_ACCOUNT_SQL = text(
    """
    UPDATE accurate_accounts
    SET account_code = :account_code,
        account_name = :account_name,
        account_type = :account_type,
        currency = :currency
    WHERE id = :db_id
    """
)

DELETE_ACCOUNT_SQL = text("DELETE FROM accurate_accounts WHERE id = :db_id")

DELETE_ENTITY_ACCOUNTS_SQL = text(
    "DELETE FROM accurate_accounts WHERE entity_id = :entity_id"
)


def account_from_row(row) -> CoaAccount:
    """Map a stored row to a domain account.

    Missing or malformed fields fall back to neutral values: id 0, level 1,
    currency IDR and type UNKNOWN.
    """
    account_type = normalize_text(row.account_type) or "UNKNOWN"
    return CoaAccount(
        id=normalize_optional_id(row.accurate_id) or 0,
        parent_id=normalize_optional_id(row.parent_id),
        level=normalize_level(row.lvl),
        is_parent=normalize_flag(row.is_parent),
        balance=coerce_decimal(row.balance),
        suspended=normalize_flag(row.suspended),
        account_code=normalize_text(row.account_code),
        account_name=normalize_text(row.account_name),
        account_type=account_type,
        account_type_name=normalize_text(row.account_type_name)
        or account_type,
        currency=normalize_currency(row.currency),
        db_id=str(row.id),
    )


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Repository backed by SQLAlchemy for accurate_accounts."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the application engine.
        """
        self._db_port = db_port

    def fetch_accounts(self, entity_id: str) -> list[CoaAccount]:
        """Return active accounts of an entity ordered by code."""
        engine = self._db_port.get_app_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_ACCOUNTS_SQL,
                {"entity_id": entity_id},
            ).all()
        return [account_from_row(row) for row in rows]

    def update_account(self, db_id: str, edit: AccountEdit) -> int:
        """Update the editable columns of one account row."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            result = conn.execute(
                UPDATE_ACCOUNT_SQL,
                {
                    "db_id": db_id,
                    "account_code": edit.account_code,
                    "account_name": edit.account_name,
                    "account_type": edit.account_type,
                    "currency": edit.currency,
                },
            )
        return result.rowcount

    def delete_account(self, db_id: str) -> int:
        """Delete one account row."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            result = conn.execute(DELETE_ACCOUNT_SQL, {"db_id": db_id})
        return result.rowcount

    def delete_all_accounts(self, entity_id: str) -> int:
        """Delete every account row of an entity."""
        engine = self._db_port.get_app_engine()
        with engine.begin() as conn:
            result = conn.execute(
                DELETE_ENTITY_ACCOUNTS_SQL,
                {"entity_id": entity_id},
            )
        return result.rowcount


__all__ = [
    "SqlAlchemyAccountsRepository",
    "account_from_row",
    "SELECT_ACCOUNTS_SQL",
    "UPDATE_ACCOUNT_SQL",
    "DELETE_ACCOUNT_SQL",
    "DELETE_ENTITY_ACCOUNTS_SQL",
]
