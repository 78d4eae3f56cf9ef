# === FILE: sitecrawl/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of the SiteCrawl crawler.

Given a starting URL, visits every page on the same host and prints each
visited URL followed by the new links found on it.

Options:
  -c, --concurrency INT   Concurrent HTTP request limit (default: 6)
  -t, --timeout SEC       Request deadline and idle threshold (default: 5)
  --termination MODE      idle (timeout heuristic) or exact (in-flight counter)
  --user-agent TEXT       User-Agent header
  --config PATH           YAML/JSON file with crawl settings
  --log-level LEVEL       Logging level (DEBUG, INFO, ...)
  --log-file PATH         Log file (stderr only if omitted)
  --json PATH             Save the crawl report as JSON
  --html PATH             Save the crawl report as HTML
  -V, --version           Show the SiteCrawl version

Example:
  sitecrawl https://example.com -c 10 -t 3 --json crawl.json
"""
import asyncio
import sys
from pathlib import Path
from urllib.parse import urlsplit

import click

from sitecrawl import __version__
from sitecrawl.config import build_config, load_config
from sitecrawl.crawler.models import PageLinks
from sitecrawl.exceptions import ConfigError
from sitecrawl.logger import configure
from sitecrawl.report.html_report import render_html
from sitecrawl.report.json_report import render_json
from sitecrawl.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def echo_visit(url: str) -> None:
    click.echo(f'Visited URL: {url}')


def echo_page(page: PageLinks) -> None:
    lines = [f'Links found on {page.url}: {len(page.links)}']
    lines.extend(f'  {link}' for link in page.links)
    click.echo('\n'.join(lines))


def _validate_url(ctx, param, value: str) -> str:
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    if parts.scheme.lower() not in ('http', 'https') or not host:
        raise click.BadParameter(f'{value!r} is not an http(s) URL with a host')
    return value


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-V', message='SiteCrawl, version %(version)s')
@click.argument('url', callback=_validate_url)
@click.option(
    '--concurrency', '-c', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Concurrent HTTP request limit  [default: 6]'
)
@click.option(
    '--timeout', '-t', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='HTTP request timeout and idle threshold in seconds  [default: 5]'
)
@click.option(
    '--termination', 'termination',
    type=click.Choice(['idle', 'exact']),
    default=None,
    help='How the end of the crawl is detected  [default: idle]'
)
@click.option(
    '--user-agent', 'user_agent',
    default=None,
    help='User-Agent header sent with every request'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON file with crawl settings; command-line values win.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
@click.option(
    '--json', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the crawl report as JSON'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the crawl report as HTML'
)
def cli(url, concurrency, timeout, termination, user_agent, config_path,
        log_level, log_file, json_output, html_output):
    """Given a starting URL, visits each URL with the same host and prints
    each URL visited as well as a list of links found on each page."""
    configure(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        file_data = load_config(config_path) if config_path else None
        cfg = build_config(
            file_data,
            seed_url=url,
            concurrency=concurrency,
            timeout=timeout,
            termination=termination,
            user_agent=user_agent,
        )
    except (ConfigError, OSError) as e:
        print_error(f'Configuration error: {e}')

    try:
        report = asyncio.run(start_crawl(cfg, on_visit=echo_visit, on_page=echo_page))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except OSError as e:
            print_error(f'Could not save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except OSError as e:
            print_error(f'Could not save HTML report: {e}')


if __name__ == "__main__":
    cli()
