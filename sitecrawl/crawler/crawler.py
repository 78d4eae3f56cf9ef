# === FILE: sitecrawl/crawler/crawler.py ===
"""
Pipeline orchestration: wires the Fetcher and the LinkExtractor together
through two bounded channels and decides when the crawl is over.

Nothing in the pipeline announces "no more work", so termination is a policy:

``idle``
    Both channel receives are bounded by ``timeout``. The first stage whose
    receive times out stops and the other one is cancelled. A page that takes
    longer than ``timeout`` to arrive can end the crawl early; the same value
    is also the per-request deadline.
``exact``
    Every enqueued URL is counted until its fetch failed or its page was
    extracted. The crawl ends when the count reaches zero.
"""
from __future__ import annotations

import asyncio
import time
from typing import Callable, List, Optional

from sitecrawl.config import CrawlConfig
from sitecrawl.crawler.fetcher import Fetcher
from sitecrawl.crawler.http import HttpClient
from sitecrawl.crawler.link_extractor import LinkExtractor
from sitecrawl.crawler.models import CrawlReport, CrawlTarget, FetchedPage, PageLinks
from sitecrawl.crawler.state import PendingWork, VisitedSet
from sitecrawl.logger import get_logger

__all__ = ("Crawler",)


class Crawler:
    """Runs one crawl from the configured seed URL."""

    def __init__(
        self,
        config: CrawlConfig,
        client: HttpClient,
        *,
        on_visit: Optional[Callable[[str], None]] = None,
        on_page: Optional[Callable[[PageLinks], None]] = None,
    ) -> None:
        self.config = config
        self.client = client
        self.on_visit = on_visit
        self.on_page = on_page
        self.target = CrawlTarget.from_url(str(config.seed_url))
        self.visited = VisitedSet([self.target.url])
        self.logger = get_logger("crawler")

    async def crawl(self) -> CrawlReport:
        cfg = self.config
        exact = cfg.termination == "exact"
        self.logger.info(
            "Crawl started: %s (host %s, concurrency %d, timeout %.2f s, termination %s)",
            self.target.url, self.target.host, cfg.concurrency, cfg.timeout, cfg.termination,
        )
        start = time.monotonic()

        url_queue: asyncio.Queue[str] = asyncio.Queue(maxsize=cfg.channel_capacity)
        page_queue: asyncio.Queue[FetchedPage] = asyncio.Queue(maxsize=cfg.channel_capacity)
        pending = PendingWork() if exact else None
        idle_timeout = None if exact else cfg.timeout

        fetcher = Fetcher(
            self.client,
            url_queue,
            page_queue,
            concurrency=cfg.concurrency,
            timeout=cfg.timeout,
            idle_timeout=idle_timeout,
            pending=pending,
            on_visit=self.on_visit,
        )
        extractor = LinkExtractor(
            self.target,
            self.visited,
            page_queue,
            url_queue,
            idle_timeout=idle_timeout,
            pending=pending,
            skip_extensions=cfg.skip_extensions,
            on_page=self.on_page,
        )

        if pending is not None:
            pending.acquire()
        await url_queue.put(self.target.url)

        tasks: List[asyncio.Task] = [
            asyncio.create_task(fetcher.run(), name="fetcher"),
            asyncio.create_task(extractor.run(), name="link-extractor"),
        ]
        if pending is not None:
            tasks.append(asyncio.create_task(pending.wait(), name="pending-work"))

        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in done:
            if not task.cancelled() and task.exception() is not None:
                self.logger.error("Stage %s failed: %s", task.get_name(), task.exception())
                raise task.exception()  # type: ignore[misc]
        self.logger.info("Crawl finished: %s stopped first", ", ".join(sorted(t.get_name() for t in done)))

        elapsed = time.monotonic() - start
        report = CrawlReport(
            seed=self.target.url,
            pages=list(extractor.pages),
            failed=list(fetcher.failed),
            elapsed=elapsed,
        )
        self.logger.info(
            "Done: %d pages, %d failed, %d URLs seen in %.2f s",
            len(report.pages), len(report.failed), len(self.visited), elapsed,
        )
        return report
