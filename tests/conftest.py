# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Optional

import pytest
from aiohttp import web

from sitecrawl.config import CrawlConfig
from sitecrawl.crawler.models import FetchedPage, HttpResponse
from sitecrawl.exceptions import FetchError
from sitecrawl.logger import configure


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class StubClient:
    """
    In-memory HttpClient.

    *pages* maps URL -> HTML body; unknown URLs answer 404. Entry/exit of
    every call is counted so tests can check how many requests overlap.
    """

    def __init__(
        self,
        pages: Dict[str, str],
        *,
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
        statuses: Optional[Dict[str, int]] = None,
        content_types: Optional[Dict[str, str]] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        self.pages = pages
        self.delay = delay
        self.delays = delays or {}
        self.statuses = statuses or {}
        self.content_types = content_types or {}
        self.errors = set(errors or ())
        self.calls: List[str] = []
        self.active = 0
        self.max_active = 0

    async def get(self, url: str, timeout: float) -> HttpResponse:
        self.calls.append(url)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(url, self.delay))
            if url in self.errors:
                raise FetchError(url, "connection refused")
            if url not in self.pages:
                return HttpResponse(url=url, status=404, content_type="text/html", text="")
            return HttpResponse(
                url=url,
                status=self.statuses.get(url, 200),
                content_type=self.content_types.get(url, "text/html; charset=utf-8"),
                text=self.pages[url],
            )
        finally:
            self.active -= 1


def links_html(*hrefs: str) -> str:
    """Build a small HTML page with one <a> per href."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture(autouse=True)
def reset_logging():
    """Re-bind the project logger to the real stderr after tests that swap streams."""
    yield
    configure()


@pytest.fixture()
def make_config():
    """Return a factory of CrawlConfig objects with test-friendly defaults."""

    def _make(seed_url: str = "https://ex.com/", **overrides) -> CrawlConfig:
        values = {"concurrency": 4, "timeout": 0.3}
        values.update(overrides)
        return CrawlConfig(seed_url=seed_url, **values)

    return _make


@pytest.fixture()
def mock_page() -> FetchedPage:
    """A fetched page with relative, duplicate, fragment and off-host links."""
    html = links_html("/a", "/a", "/a#top", "contact", "https://other.com/b", "mailto:x@ex.com")
    return FetchedPage(url="https://ex.com/dir/page", text=html)
