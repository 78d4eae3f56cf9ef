# === FILE: sitecrawl/parser/html_parser.py ===
"""HTML scanning for SiteCrawl.

:func:`extract_hrefs` is the single entry point the link extractor relies on:
raw markup in, raw ``href`` strings out, in document order. It never raises;
markup BeautifulSoup cannot make sense of simply yields fewer links.

Some sites keep their navigation inside ``<noscript>``.  Depending on the
parser that content arrives either as real tags or as an opaque text node, so
text that looks like markup is parsed a second time.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from sitecrawl.logger import get_logger

__all__: Sequence[str] = ("extract_hrefs",)

logger = get_logger("parser")


def _anchor_hrefs(soup: BeautifulSoup) -> list[str]:
    hrefs: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            hrefs.append(href)
    return hrefs


def extract_hrefs(html: str) -> list[str]:
    """Return the ``href`` of every ``<a>`` in *html*, including markup hidden in ``<noscript>``."""
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as exc:  # pragma: no cover - html.parser is very lenient
        logger.debug("Unparsable HTML (%s), no links extracted", exc)
        return []

    hrefs = _anchor_hrefs(soup)
    for noscript in soup.find_all("noscript"):
        if not isinstance(noscript, Tag):
            continue
        inner = "".join(str(s) for s in noscript.find_all(string=True, recursive=False))
        if "<a" in inner:
            hrefs.extend(_anchor_hrefs(BeautifulSoup(inner, "html.parser")))
    return hrefs
