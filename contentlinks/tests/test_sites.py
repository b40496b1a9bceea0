"""Tests for the account directories and the messaging capability."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from contentlinks.messages import MessagesService
from contentlinks.models import Account
from contentlinks.sites import (
    AccountNotFoundError,
    RemoteAccountDirectory,
    SiteInfoError,
    StaticAccountDirectory,
)

_ACCOUNTS: list[dict[str, Any]] = [
    {"id": "a", "site_url": "https://site.example", "user_id": 7, "username": "alice",
     "token": "tok-a"},
    {"id": "b", "site_url": "https://other.example", "user_id": 3, "username": "bob"},
]


@pytest.fixture
def accounts_file(tmp_path: Path) -> Path:
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps(_ACCOUNTS), encoding="utf-8")
    return path


class TestAccount:
    def test_advanced_feature(self) -> None:
        account = Account(id="a", site_url="s", user_id=1, advanced_features={"messaging": 1})
        assert account.can_use_advanced_feature("messaging")
        assert account.can_use_advanced_feature("blogs")
        assert not account.can_use_advanced_feature("blogs", when_undefined=False)

    def test_feature_turned_off(self) -> None:
        account = Account(id="a", site_url="s", user_id=1, advanced_features={"messaging": 0})
        assert not account.can_use_advanced_feature("messaging")

    def test_undefined_features(self) -> None:
        account = Account(id="a", site_url="s", user_id=1)
        assert account.can_use_advanced_feature("messaging")


class TestStaticAccountDirectory:
    def test_from_file(self, accounts_file: Path) -> None:
        directory = StaticAccountDirectory.from_file(accounts_file)
        assert len(directory) == 2

    def test_from_file_rejects_object(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON list"):
            StaticAccountDirectory.from_file(path)

    @pytest.mark.asyncio
    async def test_get_account(self, accounts_file: Path) -> None:
        directory = StaticAccountDirectory.from_file(accounts_file)
        account = await directory.get_account("a")
        assert account.user_id == 7

    @pytest.mark.asyncio
    async def test_unknown_account(self, accounts_file: Path) -> None:
        directory = StaticAccountDirectory.from_file(accounts_file)
        with pytest.raises(AccountNotFoundError):
            await directory.get_account("zzz")

    @pytest.mark.asyncio
    async def test_account_ids_for_url(self, accounts_file: Path) -> None:
        directory = StaticAccountDirectory.from_file(accounts_file)
        url = "https://site.example/message/index.php?id=1"
        assert await directory.account_ids_for_url(url) == ["a"]
        assert await directory.account_ids_for_url(url, username="bob") == []
        assert await directory.account_ids_for_url("https://nowhere.example/") == []


class TestRemoteAccountDirectory:
    @pytest.mark.asyncio
    async def test_refreshes_from_site_info(
        self, accounts_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict[str, Any] = {}

        async def fake_fetch(url: str, **kwargs: Any) -> dict[str, Any]:
            captured["url"] = url
            captured.update(kwargs)
            return {
                "userid": 11,
                "username": "alice2",
                "advancedfeatures": [{"name": "messaging", "value": 0}],
            }

        monkeypatch.setattr("contentlinks.sites.fetch_json", fake_fetch)
        directory = RemoteAccountDirectory.from_file(accounts_file, timeout=5.0)

        account = await directory.get_account("a")

        assert captured["url"] == "https://site.example/webservice/rest/server.php"
        assert captured["params"]["wsfunction"] == "core_webservice_get_site_info"
        assert captured["params"]["wstoken"] == "tok-a"
        assert captured["timeout"] == 5.0
        assert account.user_id == 11
        assert account.username == "alice2"
        assert not account.can_use_advanced_feature("messaging")

    @pytest.mark.asyncio
    async def test_ws_exception(
        self, accounts_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def fake_fetch(url: str, **kwargs: Any) -> dict[str, Any]:
            return {"exception": "moodle_exception", "errorcode": "invalidtoken",
                    "message": "Invalid token"}

        monkeypatch.setattr("contentlinks.sites.fetch_json", fake_fetch)
        directory = RemoteAccountDirectory.from_file(accounts_file)

        with pytest.raises(SiteInfoError, match="Invalid token"):
            await directory.get_account("a")

    @pytest.mark.asyncio
    async def test_missing_token(self, accounts_file: Path) -> None:
        directory = RemoteAccountDirectory.from_file(accounts_file)
        with pytest.raises(SiteInfoError, match="token"):
            await directory.get_account("b")


class TestMessagesService:
    @pytest.mark.asyncio
    async def test_is_messaging_enabled(self) -> None:
        directory = StaticAccountDirectory([
            Account(id="on", site_url="s", user_id=1, advanced_features={"messaging": 1}),
            Account(id="off", site_url="s", user_id=1, advanced_features={"messaging": 0}),
        ])
        messages = MessagesService(directory)
        assert await messages.is_messaging_enabled("on") is True
        assert await messages.is_messaging_enabled("off") is False

    @pytest.mark.asyncio
    async def test_unknown_account_propagates(self) -> None:
        messages = MessagesService(StaticAccountDirectory())
        with pytest.raises(AccountNotFoundError):
            await messages.is_messaging_enabled("ghost")
