"""
Headword lookup pipeline.

    raw query -> normalize_headword() -> SourceFetcher.fetch()
              -> locate_language_section() -> extractors -> format_entry()

lookup() and lookup_entry() never raise for a lookup: every failure
(empty query, missing page, missing section, missing field, or an
unexpected error in any stage) degrades to PLACEHOLDER fields.
"""

import logging
from typing import Optional

from ruwikt.config import Bindings, Settings, load_bindings, load_settings
from ruwikt.entry import LexicalEntry, format_entry, placeholder_entry
from ruwikt.extractors import (
    extract_definition,
    extract_examples,
    extract_part_of_speech,
    extract_synonyms,
)
from ruwikt.fetch import SourceFetcher
from ruwikt.normalize import normalize_headword
from ruwikt.sections import locate_language_section

logger = logging.getLogger(__name__)


def extract_entry(
    headword: str,
    document: str,
    language: str,
    bindings: Optional[Bindings] = None,
) -> LexicalEntry:
    """Build an entry from an already retrieved wikitext document."""
    bindings = bindings or load_bindings()

    section = locate_language_section(document, language, bindings)
    if not section.strip():
        return placeholder_entry(headword)

    example1, example2 = extract_examples(section, bindings)
    return format_entry(
        headword,
        part_of_speech=extract_part_of_speech(section, bindings),
        definition=extract_definition(section, bindings),
        synonyms=extract_synonyms(section, bindings),
        example1=example1,
        example2=example2,
    )


def lookup_entry(
    raw_query: Optional[str],
    fetcher: Optional[SourceFetcher] = None,
    settings: Optional[Settings] = None,
) -> LexicalEntry:
    """
    Look up a raw query value and return a fully populated entry.

    Args:
        raw_query: Query value as received (may be encoded or damaged)
        fetcher: Source fetcher to use (default: one built from settings)
        settings: Runtime settings (default: read from the environment)

    Returns:
        LexicalEntry; unresolved fields hold PLACEHOLDER
    """
    headword = ""
    try:
        headword = normalize_headword(raw_query)
        if not headword:
            logger.info(f"Empty headword for query {raw_query!r}")
            return placeholder_entry(headword)

        settings = settings or (fetcher.settings if fetcher else load_settings())
        fetcher = fetcher or SourceFetcher(settings)

        document = fetcher.fetch(headword)
        if not document:
            return placeholder_entry(headword)

        return extract_entry(headword, document, settings.language)
    except Exception:
        logger.exception(f"Lookup failed for {headword!r}")
        return placeholder_entry(headword)


def lookup(
    raw_query: Optional[str],
    fetcher: Optional[SourceFetcher] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Look up a raw query value and return the six-line text entry."""
    return lookup_entry(raw_query, fetcher=fetcher, settings=settings).render()
