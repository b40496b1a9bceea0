"""Base link handler interface."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass

from contentlinks.messages import MessagesService
from contentlinks.models import NavigationAction
from contentlinks.sites import AccountDirectory


@dataclass(frozen=True)
class LinkServices:
    """Collaborators handed to every handler at construction time."""

    directory: AccountDirectory
    messages: MessagesService


class BaseLinkHandler(ABC):
    """All link handlers must implement this interface.

    A handler is built once and shared by every resolution, so it must not
    keep any per-call state.
    """

    name: str = ""
    pattern: re.Pattern[str] | None = None
    feature_name: str | None = None
    priority: int = 0
    check_all_users: bool = False

    def __init__(self, services: LinkServices) -> None:
        self.services = services

    def handles(self, url: str) -> bool:
        """Check if this handler claims the given URL."""
        return self.pattern is not None and self.pattern.search(url) is not None

    def get_site_url(self, url: str) -> str | None:
        """Return the part of ``url`` before the pattern match, if any."""
        if self.pattern is None:
            return None
        match = self.pattern.search(url)
        return url[: match.start()] if match else None

    async def is_enabled(
        self,
        account_id: str,
        url: str,
        params: dict[str, str],
        course_id: int | None = None,
    ) -> bool:
        """Whether the handler can treat ``url`` for the account. Defaults to True."""
        return True

    @abstractmethod
    def get_actions(
        self,
        account_ids: list[str],
        url: str,
        params: dict[str, str],
        course_id: int | None = None,
    ) -> list[NavigationAction] | Awaitable[list[NavigationAction]]:
        """Return the actions for ``url`` (or an awaitable resolving to them)."""
        ...
