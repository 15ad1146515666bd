"""Domain models for Chart-of-Accounts records."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CoaAccount:
    """Chart-of-Accounts record for a single entity.

    Attributes:
        id: Identifier unique within the entity's account set.
        parent_id: Identifier of the parent account, None for roots.
        level: Depth in the hierarchy (root = 1), used for indentation.
        is_parent: True when the account has child accounts.
        balance: Own recorded balance; superseded by the rolled-up total
            when ``is_parent`` is true.
        suspended: Administrative inactive flag, display only.
    """

    id: int
    parent_id: int | None
    level: int
    is_parent: bool
    balance: Decimal
    suspended: bool = False
    account_code: str = ""
    account_name: str = ""
    account_type: str = "UNKNOWN"
    account_type_name: str = "Unknown"
    currency: str = "IDR"
    db_id: str | None = None


@dataclass(frozen=True)
class AccountEdit:
    """User-editable fields of a stored account."""

    account_code: str
    account_name: str
    account_type: str
    currency: str = "IDR"


@dataclass(frozen=True)
class AccountTreeRow:
    """Account prepared for tree display."""

    account: CoaAccount
    displayed_balance: Decimal
    depth: int
    visible: bool
    expanded: bool
    has_children: bool


@dataclass(frozen=True)
class Entity:
    """Business unit whose accounts and budgets are tracked."""

    id: str
    entity_name: str
    api_token: str | None = None


__all__ = ["CoaAccount", "AccountEdit", "AccountTreeRow", "Entity"]
