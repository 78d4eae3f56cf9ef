"""sitecrawl.exceptions: error types raised by the crawler and its collaborators."""

from __future__ import annotations

from typing import Optional

__all__ = ["CrawlError", "ConfigError", "FetchError", "LinkResolutionError"]


class CrawlError(Exception):
    """Base class for all SiteCrawl errors."""


class ConfigError(CrawlError, ValueError):
    """Invalid seed URL, crawl parameters or config file. Fatal at startup."""


class FetchError(CrawlError):
    """A GET that produced no usable page: network error, deadline, non-2xx or non-text body."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class LinkResolutionError(CrawlError):
    """An href that cannot be turned into an absolute URL."""

    def __init__(self, href: str, reason: str) -> None:
        super().__init__(f"{href!r}: {reason}")
        self.href = href
        self.reason = reason
