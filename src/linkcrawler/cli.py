"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from linkcrawler.builder import STRATEGIES, create_by_name
from linkcrawler.config import DEFAULT_MAX_WORKERS, CrawlConfig
from linkcrawler.errors import CrawlerError
from linkcrawler.events import PageCrawlEndedEvent, PageCrawlStartedEvent
from linkcrawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from linkcrawler.urls import is_valid_url

DEFAULT_DEPTH = 4
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected from crawl events for summary output."""
    pages_started: int = 0
    pages_crawled: int = 0
    pages_without_title: int = 0

    @property
    def pages_failed(self) -> int:
        return self.pages_started - self.pages_crawled

    def record_started(self, event: PageCrawlStartedEvent) -> None:
        self.pages_started += 1

    def record_ended(self, event: PageCrawlEndedEvent) -> None:
        self.pages_crawled += 1
        if event.document.title() is None:
            self.pages_without_title += 1


def setup_logging(verbose: bool) -> None:
    """Send library log records to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger("linkcrawler")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def clean_title(title: str) -> str:
    return title.replace("\n", " ").strip()


def print_page_tree(event: PageCrawlEndedEvent, out: Optional[TextIO] = None) -> None:
    """Print a page as a tree line, indented by its depth."""
    out = out or sys.stdout
    line = f"{clean_title(event.title)} {event.url.strip()}".strip()

    padding = ""
    if event.depth > 0:
        padding = "|" * (event.depth - 1) + "┕ "

    out.write(padding + line + "\n")


def print_page_level(event: PageCrawlEndedEvent, out: Optional[TextIO] = None) -> None:
    """Print a page prefixed with its depth."""
    out = out or sys.stdout
    out.write(f"{event.depth} {clean_title(event.title)} {event.url.strip()}".strip() + "\n")


def print_summary(stats: CrawlStats) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Pages started:          {stats.pages_started}\n")
    sys.stderr.write(f"Pages crawled:          {stats.pages_crawled}\n")
    sys.stderr.write(f"Pages failed:           {stats.pages_failed}\n")
    sys.stderr.write(f"Pages without title:    {stats.pages_without_title}\n\n")


def prompt_for_url(
    read: Optional[Callable[[str], str]] = None,
    out: Optional[TextIO] = None,
) -> Optional[str]:
    """Ask for a URL until a valid absolute http(s) URL is entered. None on EOF."""
    read = read or input
    out = out or sys.stderr
    while True:
        try:
            url = read("Enter URL to crawl: ").strip()
        except EOFError:
            return None
        if is_valid_url(url):
            return url
        out.write(f"Not a valid http(s) URL: {url!r}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkcrawler",
        description="Crawl a website down to a given depth and print every page found.",
    )
    parser.add_argument("url", nargs="?", help="Start URL (e.g. https://example.com); prompted for if omitted")
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help=f"Maximum link depth (default: {DEFAULT_DEPTH})")
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="level",
        help="eager: depth-first; level: breadth-first, level by level (default: level)",
    )
    parser.add_argument("--strict", action="store_true", help="Abort the crawl on the first HTTP error")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT:g})")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--workers", type=int, default=DEFAULT_MAX_WORKERS, help=f"Parallel fetches per level for the level strategy (default: {DEFAULT_MAX_WORKERS})")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    url = args.url
    if url is None:
        url = prompt_for_url()
        if url is None:
            sys.stderr.write("No URL given.\n")
            return 1
    elif not is_valid_url(url):
        parser.error(f"not a valid http(s) URL: {url!r}")

    try:
        config = CrawlConfig(
            target_depth=args.depth,
            ignore_http_errors=not args.strict,
            timeout=args.timeout,
            user_agent=args.user_agent,
            max_workers=args.workers,
        ).with_url(url)
    except ValueError as e:
        parser.error(str(e))

    stats = CrawlStats()
    printer = print_page_tree if args.strategy == "eager" else print_page_level

    crawler = (
        create_by_name(args.strategy, config)
        .on_page_crawl_started(stats.record_started)
        .on_page_crawl_ended(stats.record_ended)
        .on_page_crawl_ended(printer)
    )

    exit_code = 0
    try:
        crawler.run()
    except CrawlerError as e:
        sys.stderr.write(f"Crawl aborted: {e}\n")
        exit_code = 1

    if args.verbose:
        print_summary(stats)

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
