# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metascraper CLI: print a page's title, text, metadata and microdata as JSON.

Usage:
    metascraper URL [--timeout S] [--indent N] [--include-html]
    metascraper [URL] --file PATH              (PATH "-" reads stdin; URL is only recorded)
"""

from __future__ import annotations

import argparse
import dataclasses
import math
import sys
from pathlib import Path

from . import Page
from .config import ScrapeConfig
from .errors import ConfigError, FetchError, PageReadError, ResourceExhaustionError
from .logging_config import configure
from .page import read_html
from .scraper import scrape
from .serializer import to_json

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metascraper",
        description="Extract title, text, <meta> metadata and schema.org microdata from a web page.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  %(prog)s https://example.com                 Fetch and print JSON
  %(prog)s --file page.html                    Read a saved page
  curl -s https://example.com | %(prog)s -f -  Read from stdin""",
    )
    parser.add_argument("url", nargs="?", metavar="URL", help="Page to fetch (http or https)")
    parser.add_argument("-f", "--file", metavar="PATH", help="Read HTML from PATH instead of fetching; '-' for stdin")
    parser.add_argument("--timeout", type=float, metavar="S", help="Fetch timeout in seconds")
    parser.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indentation (default: 2)")
    parser.add_argument("--include-html", action="store_true", help='Add the decoded source document as "html"')
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines on stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _read_file(path: str, url: str) -> Page:
    data = sys.stdin.buffer.read() if path == "-" else Path(path).read_bytes()
    return read_html(data, url=url)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.url and not args.file:
        parser.error("either URL or --file is required")

    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else "WARNING")

    try:
        config = ScrapeConfig.from_env()
        if args.timeout is not None:
            if not math.isfinite(args.timeout) or args.timeout <= 0:
                raise ConfigError(f"--timeout must be a positive finite number, got {args.timeout}")
            config = dataclasses.replace(config, timeout=args.timeout)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        page = _read_file(args.file, args.url or "") if args.file else scrape(args.url, config)
    except PageReadError as e:
        # Partial results are still worth printing.
        print(to_json(e.page, indent=args.indent, include_html=args.include_html))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    except (FetchError, ResourceExhaustionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)

    print(to_json(page, indent=args.indent, include_html=args.include_html))


if __name__ == "__main__":
    main()
