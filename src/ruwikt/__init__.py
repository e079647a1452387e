"""
ruwikt - Russian Wiktionary headword lookup.

Turns a free-text headword into a LexicalEntry (part of speech, definition,
synonyms, two usage examples) extracted from the word's wikitext.
"""

from ruwikt.entry import LexicalEntry, format_entry
from ruwikt.lookup import extract_entry, lookup, lookup_entry

__all__ = [
    "LexicalEntry",
    "extract_entry",
    "format_entry",
    "lookup",
    "lookup_entry",
]
