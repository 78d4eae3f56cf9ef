# File: sitecrawl/utils.py
"""sitecrawl.utils: URL helpers shared by the crawler: resolution, canonical form and origin checks."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
from urllib.parse import urljoin, urlsplit, urlunsplit

from sitecrawl.exceptions import LinkResolutionError
from sitecrawl.logger import get_logger

__all__: Sequence[str] = (
    "normalize_url",
    "resolve_link",
    "url_origin",
    "is_same_origin",
    "has_skipped_extension",
)

logger = get_logger("utils")

_DEFAULT_PORTS = {"http": 80, "https": 443}
_CRAWLABLE_SCHEMES = ("http", "https")


def normalize_url(url: str) -> str:
    """Canonical form used as the visited-set key.

    Lower-cases scheme and host, drops the default port and the fragment,
    turns an empty path into ``/``. Path, query and percent-escapes are kept
    verbatim, trailing slash included. Raises ValueError on an unparsable URL.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    if not parts.netloc:
        return urlunsplit((scheme, "", parts.path, parts.query, ""))

    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{host}"

    path = parts.path or "/"
    normalized = urlunsplit((scheme, netloc, path, parts.query, ""))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def resolve_link(base_url: str, href: str) -> str:
    """Resolve *href* against the page it was found on and normalize the result."""
    raw = href.strip()
    try:
        return normalize_url(urljoin(base_url, raw))
    except ValueError as exc:
        raise LinkResolutionError(href, str(exc)) from exc


def url_origin(url: str) -> Optional[Tuple[str, str, int]]:
    """``(scheme, host, port)`` of an http(s) *url* with the port filled in from the scheme, else None."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _CRAWLABLE_SCHEMES or not host:
        return None
    return scheme, host, port or _DEFAULT_PORTS[scheme]


def is_same_origin(url: str, origin: Tuple[str, str, int]) -> bool:
    """True when *url* has exactly the scheme, hostname and port of *origin*."""
    return url_origin(url) == origin


def has_skipped_extension(url: str, extensions: Sequence[str]) -> bool:
    """True when the path of *url* ends with one of *extensions* (case-insensitive)."""
    if not extensions:
        return False
    path = urlsplit(url).path.lower()
    return path.endswith(tuple(extensions))
