#!/usr/bin/env python3
"""
ruwikt - Look up a Russian Wiktionary headword.

Usage:
    ruwikt дом                        # Six-line text entry
    ruwikt "г%D0%BE%D1%80%D0%BE%D0%B4"  # Encoded queries are repaired
    ruwikt дом --format json          # Flat JSON object
    ruwikt дом --format table         # Rich table
    ruwikt дом --file page.wikitext   # Extract from a saved page, no network

Environment:
    RUWIKT_API_URL, RUWIKT_TIMEOUT, RUWIKT_USER_AGENT, RUWIKT_LANGUAGE, DEBUG
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ruwikt.config import load_settings
from ruwikt.entry import LexicalEntry
from ruwikt.fetch import SourceFetcher
from ruwikt.lookup import extract_entry, lookup_entry
from ruwikt.normalize import normalize_headword

logger = logging.getLogger(__name__)

FIELD_LABELS = [
    ("Part of speech", "part_of_speech"),
    ("Definition", "definition"),
    ("Synonyms", "synonyms"),
    ("Example 1", "example1"),
    ("Example 2", "example2"),
]


def render_table(entry: LexicalEntry) -> Table:
    """Build a two-column Rich table for an entry."""
    table = Table(title=entry.headword, box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for label, attr in FIELD_LABELS:
        table.add_row(label, getattr(entry, attr))
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruwikt",
        description="Look up a headword in Russian Wiktionary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("word", help="Headword (raw query value; may be percent-encoded)")
    parser.add_argument(
        "--format", choices=["text", "json", "table"], default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--file", type=Path,
        help="Read wikitext from FILE instead of fetching it"
    )
    parser.add_argument("--language", help="Section language (default: Russian)")
    parser.add_argument("--api-url", help="MediaWiki API endpoint")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ruwikt CLI."""
    args = build_parser().parse_args(argv)

    settings = load_settings()
    overrides = {
        "language": args.language,
        "api_url": args.api_url,
        "timeout": args.timeout,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or settings.debug) else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )

    if args.file:
        if not args.file.exists():
            logger.error(f"Wikitext file not found: {args.file}")
            return 1
        document = args.file.read_text(encoding="utf-8")
        entry = extract_entry(normalize_headword(args.word), document, settings.language)
    else:
        entry = lookup_entry(args.word, fetcher=SourceFetcher(settings))

    if args.format == "json":
        print(entry.to_json())
    elif args.format == "table":
        Console().print(render_table(entry))
    else:
        print(entry.render())

    return 0


if __name__ == "__main__":
    sys.exit(main())
