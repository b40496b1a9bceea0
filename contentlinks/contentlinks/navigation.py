"""Navigation — the UI side of a resolved link."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from contentlinks.models import NavigationRequest

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    async def navigate(self, request: NavigationRequest) -> None: ...


async def go_in_site(
    navigator: Navigator,
    page: str,
    params: dict[str, Any],
    account_id: str,
) -> None:
    """Open ``page`` for ``account_id`` as the new history root.

    Links always redirect: pushing would let chained link resolutions build
    a back-navigation loop.
    """
    await navigator.navigate(
        NavigationRequest(page=page, params=params, account_id=account_id, redirect=True)
    )


class HistoryNavigator:
    """In-memory navigator keeping a history stack per current account."""

    def __init__(self, pages: Iterable[str] | None = None) -> None:
        self.pages = set(pages) if pages is not None else None
        self.current_account_id: str | None = None
        self.history: list[NavigationRequest] = []
        self.failures: list[tuple[NavigationRequest, str]] = []

    @property
    def current(self) -> NavigationRequest | None:
        return self.history[-1] if self.history else None

    async def navigate(self, request: NavigationRequest) -> None:
        if self.pages is not None and request.page not in self.pages:
            reason = f"Unknown page: {request.page}"
            logger.error("Navigation failed: %s", reason)
            self.failures.append((request, reason))
            return

        if request.account_id != self.current_account_id:
            logger.info(
                "Switching account %s -> %s", self.current_account_id, request.account_id
            )
            self.current_account_id = request.account_id
            self.history = []

        if request.redirect:
            self.history = [request]
        else:
            self.history.append(request)
        logger.debug("Navigated to %s %s", request.page, request.params)
