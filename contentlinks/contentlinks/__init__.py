"""contentlinks — resolve inbound links into in-app navigation."""

from contentlinks.handlers import BaseLinkHandler, LinkServices, get_all_handlers
from contentlinks.handlers.discussion import DiscussionLinkHandler
from contentlinks.models import Account, NavigationAction, NavigationRequest
from contentlinks.navigation import HistoryNavigator, Navigator, go_in_site
from contentlinks.router import LinkDispatcher

__all__ = [
    "Account",
    "BaseLinkHandler",
    "DiscussionLinkHandler",
    "HistoryNavigator",
    "LinkDispatcher",
    "LinkServices",
    "NavigationAction",
    "NavigationRequest",
    "Navigator",
    "get_all_handlers",
    "go_in_site",
]
