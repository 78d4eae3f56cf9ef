# sitecrawl/crawler/state.py
"""
Shared crawl state: the visited set and the in-flight work counter.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, Set


class VisitedSet:
    """Normalized URLs seen so far. Insertions are never undone."""

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: Set[str] = set(urls)
        self._lock = asyncio.Lock()

    async def add(self, url: str) -> bool:
        """
        Atomically check and insert *url*.

        Returns True if the URL was not present (the caller owns it now),
        False if some other extraction already claimed it.
        """
        async with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)


class PendingWork:
    """
    Exact count of URL units enqueued but not fully processed.

    A unit is acquired when its URL is put on the URL channel and released
    when its fetch fails or its page has been extracted. ``drained`` is set
    whenever the count drops to zero.
    """

    def __init__(self) -> None:
        self._count = 0
        self.drained = asyncio.Event()
        self.drained.set()

    @property
    def count(self) -> int:
        return self._count

    def acquire(self, n: int = 1) -> None:
        self._count += n
        if self._count > 0:
            self.drained.clear()

    def release(self, n: int = 1) -> None:
        if n > self._count:
            raise RuntimeError(f"released {n} units with only {self._count} pending")
        self._count -= n
        if self._count == 0:
            self.drained.set()

    async def wait(self) -> None:
        await self.drained.wait()
