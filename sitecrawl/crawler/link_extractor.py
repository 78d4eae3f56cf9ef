# sitecrawl/crawler/link_extractor.py
"""
LinkExtractor stage: pulls fetched pages, keeps the links that stay on the
seed's origin and have not been seen before, and feeds them back to the Fetcher.
"""
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence

from sitecrawl.crawler.models import CrawlTarget, FetchedPage, PageLinks
from sitecrawl.crawler.state import PendingWork, VisitedSet
from sitecrawl.exceptions import LinkResolutionError
from sitecrawl.logger import get_logger
from sitecrawl.parser.html_parser import extract_hrefs
from sitecrawl.utils import has_skipped_extension, is_same_origin, resolve_link

logger = get_logger("extractor")


def candidate_links(page: FetchedPage, target: CrawlTarget, skip_extensions: Sequence[str] = ()) -> List[str]:
    """
    Resolve and filter the hrefs of *page* without touching the visited set.

    Malformed references are dropped one by one; the rest of the page is unaffected.
    """
    links: List[str] = []
    for href in extract_hrefs(page.text):
        try:
            url = resolve_link(page.base_url, href)
        except LinkResolutionError as exc:
            logger.debug("Dropping malformed link on %s: %s", page.url, exc)
            continue
        if not is_same_origin(url, target.origin):
            continue
        if has_skipped_extension(url, skip_extensions):
            logger.debug("Skipping %s (extension)", url)
            continue
        links.append(url)
    return links


class LinkExtractor:
    """Consumes the page channel and feeds the URL channel."""

    def __init__(
        self,
        target: CrawlTarget,
        visited: VisitedSet,
        page_queue: asyncio.Queue[FetchedPage],
        url_queue: asyncio.Queue[str],
        *,
        idle_timeout: Optional[float] = None,
        pending: Optional[PendingWork] = None,
        skip_extensions: Sequence[str] = (),
        on_page: Optional[Callable[[PageLinks], None]] = None,
    ) -> None:
        self.target = target
        self.visited = visited
        self.page_queue = page_queue
        self.url_queue = url_queue
        self.idle_timeout = idle_timeout
        self.pending = pending
        self.skip_extensions = tuple(skip_extensions)
        self.on_page = on_page
        self.pages: List[PageLinks] = []
        self.logger = logger

    async def run(self) -> None:
        """
        Process pages until cancelled, or until the page channel stays empty
        for ``idle_timeout`` seconds.
        """
        while True:
            self.logger.debug("LinkExtractor: waiting for a page")
            page = await self._receive()
            if page is None:
                self.logger.info("LinkExtractor: page channel idle for %.2f s, stopping", self.idle_timeout)
                return
            try:
                await self.process(page)
            finally:
                if self.pending is not None:
                    self.pending.release()

    async def _receive(self) -> Optional[FetchedPage]:
        if self.idle_timeout is None:
            return await self.page_queue.get()
        try:
            return await asyncio.wait_for(self.page_queue.get(), timeout=self.idle_timeout)
        except asyncio.TimeoutError:
            return None

    async def process(self, page: FetchedPage) -> PageLinks:
        """Claim the new links of *page*, enqueue them and report them as one unit."""
        found = PageLinks(url=page.url)
        for url in candidate_links(page, self.target, self.skip_extensions):
            if not await self.visited.add(url):
                continue
            found.links.append(url)
            if self.pending is not None:
                self.pending.acquire()
            await self.url_queue.put(url)
        self.pages.append(found)
        self.logger.debug("LinkExtractor: %d new links on %s", len(found.links), page.url)
        if self.on_page is not None:
            self.on_page(found)
        return found
