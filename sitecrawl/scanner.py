# === FILE: sitecrawl/scanner.py ===
"""
Wrapper that opens the HTTP client and runs one crawl.
"""
from typing import Callable, Optional

from sitecrawl.config import CrawlConfig
from sitecrawl.crawler.crawler import Crawler
from sitecrawl.crawler.http import AiohttpClient
from sitecrawl.crawler.models import CrawlReport, PageLinks


async def start_crawl(
    cfg: CrawlConfig,
    on_visit: Optional[Callable[[str], None]] = None,
    on_page: Optional[Callable[[PageLinks], None]] = None,
) -> CrawlReport:
    """
    Crawl from ``cfg.seed_url`` with an aiohttp client and return the report.

    Parameters
    ----------
    cfg : CrawlConfig
        Validated crawl configuration.
    on_visit, on_page : callable, optional
        Called for every fetched URL and for every page's accepted links.

    Returns
    -------
    CrawlReport
        Pages with their links, failed URLs and elapsed time.
    """
    async with AiohttpClient(cfg.user_agent, timeout=cfg.timeout) as client:
        crawler = Crawler(cfg, client, on_visit=on_visit, on_page=on_page)
        return await crawler.crawl()

__all__ = ["start_crawl"]
