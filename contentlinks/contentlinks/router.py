"""Link dispatcher — route a URL to the handlers able to treat it."""

from __future__ import annotations

import asyncio
import inspect
import logging

from contentlinks.handlers.base import BaseLinkHandler
from contentlinks.models import NavigationAction
from contentlinks.navigation import Navigator
from contentlinks.sites import AccountDirectory
from contentlinks.utils.urls import extract_url_params

logger = logging.getLogger(__name__)


class LinkDispatcher:
    """Registry of link handlers; resolves a URL into navigation actions."""

    def __init__(self, directory: AccountDirectory) -> None:
        self.directory = directory
        self._handlers: dict[str, BaseLinkHandler] = {}

    def register(self, handler: BaseLinkHandler) -> bool:
        if handler.name in self._handlers:
            logger.warning("Handler %s already registered", handler.name)
            return False
        self._handlers[handler.name] = handler
        logger.debug("Registered link handler %s", handler.name)
        return True

    @property
    def handlers(self) -> list[BaseLinkHandler]:
        return list(self._handlers.values())

    def handlers_for(self, url: str) -> list[BaseLinkHandler]:
        return [handler for handler in self._handlers.values() if handler.handles(url)]

    def get_site_url(self, url: str) -> str | None:
        """Guess the site URL of ``url`` using the registered patterns."""
        for handler in self._handlers.values():
            site_url = handler.get_site_url(url)
            if site_url:
                return site_url
        return None

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def get_actions_for(
        self,
        url: str,
        course_id: int | None = None,
        username: str | None = None,
    ) -> list[NavigationAction]:
        """Return the actions of every eligible handler, highest priority first."""
        account_ids = await self.directory.account_ids_for_url(url, username)
        if not account_ids:
            logger.debug("No account can open %s", url)
            return []

        params = extract_url_params(url)
        handlers = self.handlers_for(url)
        results = await asyncio.gather(
            *(self._actions_from(h, account_ids, url, params, course_id) for h in handlers)
        )

        # sorted() is stable, so equal priorities keep registration order.
        ranked = sorted(zip(handlers, results), key=lambda pair: pair[0].priority, reverse=True)
        return [action for _handler, actions in ranked for action in actions]

    async def _actions_from(
        self,
        handler: BaseLinkHandler,
        account_ids: list[str],
        url: str,
        params: dict[str, str],
        course_id: int | None,
    ) -> list[NavigationAction]:
        try:
            enabled_ids = await self._filter_enabled_accounts(
                handler, account_ids, url, params, course_id
            )
        except Exception:
            logger.warning(
                "Handler %s could not be checked for %s", handler.name, url, exc_info=True
            )
            return []
        if not enabled_ids:
            return []

        try:
            actions = handler.get_actions(enabled_ids, url, params, course_id)
            if inspect.isawaitable(actions):
                actions = await actions
        except Exception:
            logger.warning(
                "Handler %s failed to build actions for %s", handler.name, url, exc_info=True
            )
            return []

        return [
            action if action.sites else action.model_copy(update={"sites": enabled_ids})
            for action in actions or []
        ]

    async def _filter_enabled_accounts(
        self,
        handler: BaseLinkHandler,
        account_ids: list[str],
        url: str,
        params: dict[str, str],
        course_id: int | None,
    ) -> list[str]:
        if not handler.check_all_users:
            # Checking the first account decides for all of them.
            enabled = await self._is_handler_enabled(
                handler, account_ids[0], url, params, course_id
            )
            return list(account_ids) if enabled else []

        verdicts = await asyncio.gather(
            *(
                self._is_handler_enabled(handler, account_id, url, params, course_id)
                for account_id in account_ids
            )
        )
        return [account_id for account_id, ok in zip(account_ids, verdicts) if ok]

    async def _is_handler_enabled(
        self,
        handler: BaseLinkHandler,
        account_id: str,
        url: str,
        params: dict[str, str],
        course_id: int | None,
    ) -> bool:
        if handler.feature_name:
            account = await self.directory.get_account(account_id)
            if account.is_feature_disabled(handler.feature_name):
                return False
        return await handler.is_enabled(account_id, url, params, course_id)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @staticmethod
    def first_valid_action(actions: list[NavigationAction]) -> NavigationAction | None:
        for action in actions:
            if action.sites:
                return action
        return None

    async def handle_link(
        self,
        url: str,
        navigator: Navigator,
        course_id: int | None = None,
        username: str | None = None,
    ) -> bool:
        """Resolve ``url`` and run its first valid action. Returns whether it was handled."""
        actions = await self.get_actions_for(url, course_id, username)
        action = self.first_valid_action(actions)
        if action is None:
            logger.info("No handler found for %s", url)
            return False

        await action.action(action.sites[0], navigator)
        return True
