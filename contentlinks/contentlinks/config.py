"""Configuration management for contentlinks."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """Global configuration."""

    accounts_file: str | None = None
    http_timeout: float = 30.0
    remote: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            accounts_file=os.getenv("CONTENTLINKS_ACCOUNTS"),
            http_timeout=float(os.getenv("CONTENTLINKS_TIMEOUT", "30")),
            remote=os.getenv("CONTENTLINKS_REMOTE", "") in ("1", "true", "yes"),
            log_level=os.getenv("CONTENTLINKS_LOG_LEVEL", cls.log_level).upper(),
        )
