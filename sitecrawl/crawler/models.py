# sitecrawl/crawler/models.py
"""
Data models for the SiteCrawl pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sitecrawl.exceptions import ConfigError
from sitecrawl.utils import normalize_url, url_origin


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """
    Seed URL plus the origin every crawled URL must match exactly.

    ``http://`` vs ``https://`` and a different port count as another site,
    so the same path is never fetched twice under two origins.
    """

    url: str
    scheme: str
    host: str
    port: int

    @property
    def origin(self) -> Tuple[str, str, int]:
        return self.scheme, self.host, self.port

    @classmethod
    def from_url(cls, url: str) -> CrawlTarget:
        try:
            normalized = normalize_url(url)
        except ValueError as exc:
            raise ConfigError(f"Invalid seed URL {url!r}: {exc}") from exc
        origin = url_origin(normalized)
        if origin is None:
            raise ConfigError(f"Seed URL {url!r} is not an http(s) URL with a host")
        scheme, host, port = origin
        return cls(url=normalized, scheme=scheme, host=host, port=port)


@dataclass(slots=True)
class HttpResponse:
    """What the HTTP client hands back for one GET."""

    url: str
    status: int
    content_type: str
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True)
class FetchedPage:
    """Body text of a fetched page tagged with the URL it came from."""

    url: str
    text: str
    ok: bool = True
    final_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        """URL relative links resolve against (the one after redirects, if any)."""
        return self.final_url or self.url


@dataclass(slots=True)
class PageLinks:
    """Links accepted on one page, in extraction order."""

    url: str
    links: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CrawlReport:
    """Aggregate outcome of a crawl."""

    seed: str
    pages: List[PageLinks] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    elapsed: Optional[float] = None

    @property
    def visited(self) -> List[str]:
        return [page.url for page in self.pages]

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "pages": [{"url": p.url, "links": list(p.links)} for p in self.pages],
            "failed": list(self.failed),
            "elapsed": self.elapsed,
        }
