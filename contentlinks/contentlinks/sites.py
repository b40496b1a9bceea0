"""Account directory — resolve account ids to the accounts behind them."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from contentlinks.models import Account
from contentlinks.utils.http import fetch_json
from contentlinks.utils.urls import url_belongs_to_site

logger = logging.getLogger(__name__)

_WS_PATH = "/webservice/rest/server.php"
_SITE_INFO_FUNCTION = "core_webservice_get_site_info"


class AccountNotFoundError(LookupError):
    """Raised when an account id is not known to the directory."""


class SiteInfoError(RuntimeError):
    """Raised when a site refuses to return its info for an account."""


class AccountDirectory(Protocol):
    async def get_account(self, account_id: str) -> Account: ...

    async def account_ids_for_url(self, url: str, username: str | None = None) -> list[str]: ...


class StaticAccountDirectory:
    """In-memory directory of the accounts stored on this device."""

    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self._accounts: dict[str, Account] = {}
        for account in accounts:
            self._accounts[account.id] = account

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> StaticAccountDirectory:
        """Load accounts from a JSON file holding a list of account objects."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Accounts file must contain a JSON list: {path}")
        return cls((Account.model_validate(item) for item in raw), **kwargs)

    def __len__(self) -> int:
        return len(self._accounts)

    async def get_account(self, account_id: str) -> Account:
        try:
            return self._accounts[account_id]
        except KeyError:
            raise AccountNotFoundError(f"Unknown account: {account_id}") from None

    async def account_ids_for_url(self, url: str, username: str | None = None) -> list[str]:
        ids = [
            account.id
            for account in self._accounts.values()
            if url_belongs_to_site(url, account.site_url)
            and (username is None or account.username == username)
        ]
        logger.debug("URL %s belongs to accounts %s", url, ids)
        return ids


class RemoteAccountDirectory(StaticAccountDirectory):
    """Directory that refreshes each account from its site's web service."""

    def __init__(self, accounts: Iterable[Account] = (), *, timeout: float = 30.0) -> None:
        super().__init__(accounts)
        self.timeout = timeout

    async def get_account(self, account_id: str) -> Account:
        account = await super().get_account(account_id)
        if not account.token:
            raise SiteInfoError(f"Account {account_id} has no web service token")

        info = await self._fetch_site_info(account)
        features = {
            str(feature.get("name")): int(feature.get("value", 0))
            for feature in info.get("advancedfeatures") or []
        }
        return account.model_copy(
            update={
                "user_id": int(info["userid"]),
                "username": info.get("username", account.username),
                "advanced_features": features,
            }
        )

    async def _fetch_site_info(self, account: Account) -> dict[str, Any]:
        data = await fetch_json(
            account.site_url.rstrip("/") + _WS_PATH,
            params={
                "wstoken": account.token,
                "wsfunction": _SITE_INFO_FUNCTION,
                "moodlewsrestformat": "json",
            },
            timeout=self.timeout,
        )
        if not isinstance(data, dict) or "userid" not in data:
            message = data.get("message") if isinstance(data, dict) else None
            raise SiteInfoError(
                f"Site info unavailable for {account.id}: {message or 'unexpected response'}"
            )
        return data
