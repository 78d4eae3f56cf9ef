# sitecrawl/crawler/fetcher.py
"""
Fetcher stage: turns URLs from the URL channel into pages on the page channel,
with a bounded number of requests in flight and a hard per-request deadline.

A permit covers the HTTP exchange only. It is released before the page is put
on the page channel, so a full page channel never stops the Fetcher from
draining the URL channel; holding the permit (or capping the tasks parked on
``put``) would let the two bounded channels block each other. The cost is
memory: while the LinkExtractor lags, every fetched body stays in its parked
task, so the page channel capacity limits queued pages, not pages in memory.
The upper bound is the number of URLs accepted into the crawl.
"""
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from sitecrawl.crawler.http import HttpClient
from sitecrawl.crawler.models import FetchedPage
from sitecrawl.crawler.state import PendingWork
from sitecrawl.exceptions import FetchError
from sitecrawl.logger import get_logger

_TEXT_MARKERS = ("html", "xml")


def is_textual(content_type: str) -> bool:
    """True for text/*, *html* and *xml* media types, or when the server sent none."""
    mime = content_type.split(";", 1)[0].strip().lower()
    if not mime:
        return True
    return mime.startswith("text/") or any(marker in mime for marker in _TEXT_MARKERS)


class Fetcher:
    """Consumes the URL channel and feeds the page channel."""

    def __init__(
        self,
        client: HttpClient,
        url_queue: asyncio.Queue[str],
        page_queue: asyncio.Queue[FetchedPage],
        *,
        concurrency: int,
        timeout: float,
        idle_timeout: Optional[float] = None,
        pending: Optional[PendingWork] = None,
        on_visit: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client
        self.url_queue = url_queue
        self.page_queue = page_queue
        self.concurrency = concurrency
        self.timeout = timeout
        self.idle_timeout = idle_timeout
        self.pending = pending
        self.on_visit = on_visit
        self.failed: List[str] = []
        self._permits = asyncio.Semaphore(concurrency)
        self._active = 0
        self.logger = get_logger("fetcher")

    async def run(self) -> None:
        """
        Fetch URLs until cancelled, or until the URL channel stays empty for
        ``idle_timeout`` seconds while no fetch is in flight.
        """
        self.logger.info("Fetcher: max concurrent requests %d", self.concurrency)
        async with asyncio.TaskGroup() as tg:
            while True:
                url = await self._receive()
                if url is None:
                    self.logger.info("Fetcher: URL channel idle for %.2f s, stopping", self.idle_timeout)
                    return
                # released by the fetch task
                await self._permits.acquire()
                self._active += 1
                tg.create_task(self._fetch_and_emit(url), name=f"fetch {url}")

    async def _receive(self) -> Optional[str]:
        if self.idle_timeout is None:
            return await self.url_queue.get()
        while True:
            try:
                return await asyncio.wait_for(self.url_queue.get(), timeout=self.idle_timeout)
            except asyncio.TimeoutError:
                if not self._active:
                    return None
                self.logger.debug("Fetcher: channel idle with %d fetches in flight", self._active)

    async def _fetch_and_emit(self, url: str) -> None:
        try:
            page = await self.fetch(url)
        except FetchError as exc:
            self.logger.warning("Fetch failed %s", exc)
            self.failed.append(url)
            if self.pending is not None:
                self.pending.release()
            return
        finally:
            self._active -= 1
            self._permits.release()

        if self.on_visit is not None:
            self.on_visit(url)
        # may park here holding the body; the permit is already free
        await self.page_queue.put(page)

    async def fetch(self, url: str) -> FetchedPage:
        """
        GET *url* within the deadline.

        Returns a FetchedPage for a 2xx textual response, raises FetchError otherwise.
        """
        self.logger.debug("Fetcher: GET %s", url)
        try:
            resp = await asyncio.wait_for(self.client.get(url, self.timeout), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"deadline of {self.timeout:g}s exceeded") from exc
        if not resp.ok:
            raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
        if not is_textual(resp.content_type):
            raise FetchError(url, f"non-text content {resp.content_type!r}", status=resp.status)
        final_url = resp.url if resp.url and resp.url != url else None
        return FetchedPage(url=url, text=resp.text, ok=True, final_url=final_url)
