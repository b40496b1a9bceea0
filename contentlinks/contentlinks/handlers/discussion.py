"""Link handler for private message discussions."""

from __future__ import annotations

import logging
import re
from typing import Any

from contentlinks.handlers.base import BaseLinkHandler
from contentlinks.models import NavigationAction
from contentlinks.navigation import Navigator, go_in_site
from contentlinks.utils.urls import parse_int

logger = logging.getLogger(__name__)

DISCUSSION_PAGE = "AddonMessagesDiscussionPage"


class DiscussionLinkHandler(BaseLinkHandler):
    """Match message index URLs with params id, user1 or user2."""

    name = "AddonMessagesDiscussionLinkHandler"
    pattern = re.compile(r"/message/index\.php.*([?&](id|user1|user2)=[0-9]+)")
    # Eligibility depends on the account (user1 must be the current user).
    check_all_users = True

    async def is_enabled(
        self,
        account_id: str,
        url: str,
        params: dict[str, str],
        course_id: int | None = None,
    ) -> bool:
        # Checked before any lookup, so a failing capability lookup cannot reject this URL.
        if "id" not in params and "user2" not in params:
            # Other user not defined, cannot treat the URL.
            return False

        if not await self.services.messages.is_messaging_enabled(account_id):
            return False

        if "user1" in params:
            # The app only supports conversations of the current user.
            account = await self.services.directory.get_account(account_id)
            user1 = parse_int(params["user1"])
            if user1 != account.user_id:
                logger.debug(
                    "Discussion link for user %s ignored by account %s (user %s)",
                    params["user1"],
                    account_id,
                    account.user_id,
                )
                return False

        return True

    def get_actions(
        self,
        account_ids: list[str],
        url: str,
        params: dict[str, str],
        course_id: int | None = None,
    ) -> list[NavigationAction]:
        async def action(account_id: str, navigator: Navigator) -> None:
            state: dict[str, Any] = {"userId": parse_int(params.get("id") or params.get("user2"))}
            await go_in_site(navigator, DISCUSSION_PAGE, state, account_id)

        return [NavigationAction(action=action)]
