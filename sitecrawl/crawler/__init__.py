# File: sitecrawl/crawler/__init__.py
"""sitecrawl.crawler: the fetch / extract pipeline and its orchestrator."""

from .crawler import Crawler
from .fetcher import Fetcher
from .http import AiohttpClient, HttpClient
from .link_extractor import LinkExtractor
from .models import CrawlReport, CrawlTarget, FetchedPage, HttpResponse, PageLinks
from .state import PendingWork, VisitedSet

__all__ = [
    "AiohttpClient",
    "CrawlReport",
    "CrawlTarget",
    "Crawler",
    "FetchedPage",
    "Fetcher",
    "HttpClient",
    "HttpResponse",
    "LinkExtractor",
    "PageLinks",
    "PendingWork",
    "VisitedSet",
]
