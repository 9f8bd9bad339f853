# meta_scout/crawler/link_resolver.py
"""
Link resolution and URL normalization utilities for MetaScout.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

__all__ = ("ResolutionError", "resolve", "same_host", "hostname", "normalize_url")

_ALLOWED_SCHEMES = ("http", "https")


class ResolutionError(ValueError):
    """Raised when a raw link cannot be turned into an absolute http(s) URL."""


def normalize_url(url: str) -> str:
    """
    Normalize URL for visited-set keys:
    lowercase scheme and host, empty path becomes "/", fragment dropped.
    """
    parts = urlsplit(url)
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, ""))


def resolve(base: str, raw: Optional[str]) -> str:
    """
    Resolve *raw* against *base* and return an absolute, normalized URL.

    Links that already carry a scheme are taken as they are. Raises
    :class:`ResolutionError` for empty input, unparsable URLs and
    non-http(s) schemes (mailto:, javascript:, tel:).
    """
    if raw is None or not raw.strip():
        raise ResolutionError("empty link")
    raw = raw.strip()
    try:
        target = raw if urlsplit(raw).scheme else urljoin(base, raw)
        parts = urlsplit(target)
        # .port raises on a non-numeric or out-of-range port
        _ = parts.port
    except ValueError as exc:
        raise ResolutionError(f"malformed link {raw!r}: {exc}") from exc
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise ResolutionError(f"unsupported scheme in {raw!r}")
    if not parts.hostname:
        raise ResolutionError(f"no host in {raw!r}")
    return normalize_url(target)


def hostname(url: str) -> str:
    """Return lowercased hostname of *url*, or *url* itself if it is a bare host."""
    try:
        host = urlsplit(url).hostname if "//" in url else url
    except ValueError:
        return ""
    return (host or "").lower()


def same_host(a: str, b: str) -> bool:
    """Compare hostnames case-insensitively, ignoring scheme, port and path."""
    host_a, host_b = hostname(a), hostname(b)
    return bool(host_a) and host_a == host_b
