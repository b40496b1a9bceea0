"""Core data models for contentlinks."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, Field


class Account(BaseModel, frozen=True):
    """A logged-in user on a site."""

    id: str
    site_url: str
    user_id: int
    username: str | None = None
    token: str | None = None
    advanced_features: dict[str, int] | None = None
    disabled_features: list[str] = Field(default_factory=list)

    def can_use_advanced_feature(self, name: str, when_undefined: bool = True) -> bool:
        """Whether the site enabled an advanced feature for this account."""
        if self.advanced_features is None or name not in self.advanced_features:
            return when_undefined
        return self.advanced_features[name] == 1

    def is_feature_disabled(self, name: str) -> bool:
        return name in self.disabled_features


class NavigationRequest(BaseModel, frozen=True):
    """A single request to move the UI to a page."""

    page: str
    params: dict[str, Any] = Field(default_factory=dict)
    account_id: str
    redirect: bool = True


class NavigationAction(BaseModel, frozen=True):
    """Deferred navigation produced by a link handler."""

    message: str = "core.view"
    icon: str = "eye"
    sites: list[str] = Field(default_factory=list)
    action: Callable[[str, Any], Awaitable[None]]
