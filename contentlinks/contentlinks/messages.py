"""Messaging capability checks."""

from __future__ import annotations

from contentlinks.sites import AccountDirectory

MESSAGING_FEATURE = "messaging"


class MessagesService:
    """Answers whether private messaging is available for an account."""

    def __init__(self, directory: AccountDirectory) -> None:
        self.directory = directory

    async def is_messaging_enabled(self, account_id: str) -> bool:
        account = await self.directory.get_account(account_id)
        return account.can_use_advanced_feature(MESSAGING_FEATURE)
