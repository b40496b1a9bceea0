"""HTTP utilities for talking to site web services."""

from __future__ import annotations

from typing import Any

import httpx

_DEFAULT_HEADERS = {
    "User-Agent": "contentlinks/0.1.0",
    "Accept": "application/json",
}


async def fetch_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float = 30.0,
) -> Any:
    """GET a site web service endpoint and decode its JSON payload."""
    merged = {**_DEFAULT_HEADERS, **(headers or {})}
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        resp = await client.get(url, headers=merged, params=params)
        resp.raise_for_status()
        return resp.json()
