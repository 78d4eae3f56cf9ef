# sitecrawl/report/json_report.py

"""
JSON report for SiteCrawl.

Serializes a CrawlReport to a file.
"""
import json
from pathlib import Path

from sitecrawl.crawler.models import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: CrawlReport returned by the crawler
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from sitecrawl.report.json_report import render_json
    report_path = render_json(report, 'reports/crawl.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
