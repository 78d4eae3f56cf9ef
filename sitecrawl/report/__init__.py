# File: sitecrawl/report/__init__.py
"""sitecrawl.report: JSON and HTML renderings of a CrawlReport used by the CLI."""

from .html_report import render_html
from .json_report import render_json

__all__ = ["render_json", "render_html"]
