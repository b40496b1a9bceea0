"""Auto-discover and register all link handlers."""

from __future__ import annotations

import importlib

from contentlinks.handlers.base import BaseLinkHandler, LinkServices

_HANDLER_MODULES = [
    "contentlinks.handlers.discussion",
]


def get_all_handlers(services: LinkServices) -> list[BaseLinkHandler]:
    """Import and instantiate all available handlers."""
    handlers: list[BaseLinkHandler] = []
    for mod_path in _HANDLER_MODULES:
        mod = importlib.import_module(mod_path)
        for attr_name in dir(mod):
            attr = getattr(mod, attr_name)
            if (
                isinstance(attr, type)
                and issubclass(attr, BaseLinkHandler)
                and attr is not BaseLinkHandler
                and attr.__module__ == mod_path
            ):
                handlers.append(attr(services))
    return handlers


__all__ = ["BaseLinkHandler", "LinkServices", "get_all_handlers"]
