"""sitecrawl.parser: HTML scanning helpers."""

from .html_parser import extract_hrefs

__all__ = ["extract_hrefs"]
