# sitecrawl/crawler/http.py
"""
HTTP client used by the Fetcher. Constructed by the caller and passed in
explicitly so tests can substitute an in-memory double.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitecrawl.crawler.models import HttpResponse
from sitecrawl.exceptions import FetchError
from sitecrawl.logger import get_logger

__all__ = ("HttpClient", "AiohttpClient")


class HttpClient(Protocol):
    """Anything able to GET a URL within a deadline."""

    async def get(self, url: str, timeout: float) -> HttpResponse:
        """Return the response or raise FetchError."""
        ...


class AiohttpClient:
    """aiohttp-backed client; use as an async context manager."""

    def __init__(self, user_agent: str, timeout: Optional[float] = None) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.session: Optional[ClientSession] = None
        self.logger = get_logger("http")

    async def __aenter__(self) -> AiohttpClient:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def get(self, url: str, timeout: float) -> HttpResponse:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                ctype = resp.headers.get("Content-Type", "")
                # bodies of error responses are never used
                text = await resp.text(errors="replace") if 200 <= resp.status < 300 else ""
                return HttpResponse(url=str(resp.url), status=resp.status, content_type=ctype, text=text)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"no response within {timeout:g}s") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
