"""URL helpers shared by the dispatcher and the handlers."""

from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlsplit

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def extract_url_params(url: str) -> dict[str, str]:
    """Return the query parameters of ``url``, e.g. 'site.com?id=1' -> {'id': '1'}."""
    query = urlsplit(url).query
    return dict(parse_qsl(query, keep_blank_values=True))


def parse_int(value: str | None) -> int | None:
    """Parse the leading base-10 integer of ``value``; ``None`` when there is none."""
    if value is None:
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def _strip_scheme(url: str) -> str:
    return re.sub(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", "", url.strip())


def url_belongs_to_site(url: str, site_url: str) -> bool:
    """Check whether ``url`` lives under ``site_url`` (scheme and host case ignored)."""
    target = _strip_scheme(url)
    base = _strip_scheme(site_url).rstrip("/")
    if not base:
        return False

    host, _, path = base.partition("/")
    t_host, _, t_path = target.partition("/")
    if host.lower() != t_host.lower():
        return False
    if not path:
        return True
    return t_path == path or t_path.startswith((path + "/", path + "?", path + "#"))
