"""Accounts source backed by the Accurate Online API."""

import base64
from datetime import datetime
import hashlib
import hmac
from typing import Any

import requests

from src.application.ports.accounts_sync import AccountsSourcePort
from src.domain.models.accounts import CoaAccount
from src.domain.services.normalization import (
    normalize_currency,
    normalize_flag,
    normalize_level,
    normalize_optional_id,
    normalize_text,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


GL_ACCOUNT_LIST_PATH = "/accurate/api/glaccount/list.do"

GL_ACCOUNT_FIELDS = (
    "id,no,name,accountType,accountTypeName,balance,currency,"
    "isParent,suspended,parent,lvl"
)


class AccurateConfigurationError(RuntimeError):
    """Raised when credentials needed by the Accurate API are missing."""


class AccurateApiError(RuntimeError):
    """Raised when the Accurate API rejects a request."""


def build_signature(secret_key: str, timestamp: str) -> str:
    """Return the base64 HMAC-SHA256 signature of a request timestamp."""
    digest = hmac.new(
        secret_key.encode("utf-8"),
        timestamp.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def _nested_value(value: Any, key: str) -> Any:
    """Return ``value[key]`` for dict payloads, the value itself otherwise."""
    if isinstance(value, dict):
        return value.get(key)
    return value


def account_from_payload(payload: dict[str, Any]) -> CoaAccount:
    """Map one ``glaccount/list.do`` record to a domain account."""
    account_type = normalize_text(
        _nested_value(payload.get("accountType"), "name")
    ) or "UNKNOWN"
    return CoaAccount(
        id=normalize_optional_id(payload.get("id")) or 0,
        parent_id=normalize_optional_id(
            _nested_value(payload.get("parent"), "id")
        ),
        level=normalize_level(payload.get("lvl")),
        is_parent=normalize_flag(payload.get("isParent")),
        balance=coerce_decimal(payload.get("balance")),
        suspended=normalize_flag(payload.get("suspended")),
        account_code=normalize_text(payload.get("no")),
        account_name=normalize_text(payload.get("name")),
        account_type=account_type,
        account_type_name=normalize_text(payload.get("accountTypeName"))
        or account_type,
        currency=normalize_currency(
            _nested_value(payload.get("currency"), "code")
        ),
    )


class AccurateAccountsSource(AccountsSourcePort):
    """Account source reading the general-ledger account list."""

    source_type = "accurate"

    def __init__(
        self,
        api_token: str | None,
        secret_key: str | None,
        host: str,
        page_size: int = 100,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        logger=None,
    ) -> None:
        """Initialize the source adapter.

        Args:
            api_token: Entity API token issued by Accurate.
            secret_key: Secret used to sign each request.
            host: Base URL of the Accurate API host.
            page_size: Records requested per page.
            timeout: Request timeout in seconds.
            session: Optional HTTP session, mainly for tests.
            logger: Optional logger compatible with logging.Logger-like API.

        Raises:
            AccurateConfigurationError: If token or secret is missing.
        """
        if not api_token:
            raise AccurateConfigurationError(
                "No Accurate API token configured for this entity"
            )
        if not secret_key:
            raise AccurateConfigurationError(
                "ACCURATE_SECRET_KEY is not configured"
            )
        self._api_token = api_token.strip()
        self._secret_key = secret_key.strip()
        self._url = host.rstrip("/") + GL_ACCOUNT_LIST_PATH
        self._page_size = page_size
        self._timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or get_app_logger()

    def fetch_accounts(self, entity_id: str) -> list[CoaAccount]:
        """Return every account across all result pages.

        Args:
            entity_id: Entity the token belongs to, used for logging.

        Returns:
            list[CoaAccount]: Accounts sorted by id.
        """
        accounts: list[CoaAccount] = []
        page = 1
        page_count = 1
        while page <= page_count:
            body = self._fetch_page(page)
            accounts.extend(
                account_from_payload(item) for item in body.get("d") or []
            )
            page_count = int(
                (body.get("sp") or {}).get("pageCount") or page_count
            )
            page += 1
        self._logger.info(
            f"Fetched {len(accounts)} accounts from Accurate "
            f"for entity {entity_id} in {page_count} pages"
        )
        return sorted(accounts, key=lambda account: account.id)

    def _fetch_page(self, page: int) -> dict[str, Any]:
        timestamp = datetime.now().strftime("%d/%m/%Y %H:%M:%S")
        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "X-Api-Timestamp": timestamp,
            "X-Api-Signature": build_signature(self._secret_key, timestamp),
        }
        params = {
            "fields": GL_ACCOUNT_FIELDS,
            "sp.page": page,
            "sp.pageSize": self._page_size,
        }
        try:
            response = self._session.get(
                self._url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise AccurateApiError(
                f"Accurate request for page {page} failed: {exc}"
            ) from exc
        body = response.json()
        if not body.get("s"):
            detail = body.get("d") or body.get("error") or "unknown error"
            raise AccurateApiError(f"Accurate rejected the request: {detail}")
        return body


__all__ = [
    "AccurateAccountsSource",
    "AccurateApiError",
    "AccurateConfigurationError",
    "account_from_payload",
    "build_signature",
    "GL_ACCOUNT_LIST_PATH",
    "GL_ACCOUNT_FIELDS",
]
