"""
Reduce a wikitext fragment to plain prose.

clean_markup() is meant for a single line or short fragment picked by an
extractor. It must not be run over a whole section: extractors rely on
line starts ('#', '*', ':') to tell list items from prose, and step 6
strips exactly those markers.

Steps, in order:
    1-3. wikilinks -> label/target, external links -> label or nothing,
         templates removed at any nesting depth (WikitextParser)
    4.   comments and inline tags removed, entities unescaped
    5.   '' and ''' emphasis removed
    6.   leading list markers (# * : ;) stripped per line
    7.   whitespace collapsed
"""

import html
import re

from ruwikt.wikitext_parser import strip_wikitext_markup

COMMENT = re.compile(r"<!--.*?(?:-->|$)", re.DOTALL)
# <ref>...</ref> bodies are footnotes, not prose
REF_BLOCK = re.compile(r"<ref\b[^>/]*>.*?</ref\s*>", re.DOTALL | re.IGNORECASE)
TAG = re.compile(r"</?[a-zA-Z][^>]*>")
NAKED_URL = re.compile(r"https?://[^\s\]]+")
EMPHASIS = re.compile(r"'{2,3}")
LIST_MARKER = re.compile(r"^[ \t]*[#*:;]+[ \t]*", re.MULTILINE)
WHITESPACE = re.compile(r"\s+")


def clean_markup(fragment: str) -> str:
    """Return the visible text of a wikitext fragment, or "" if none."""
    if not fragment:
        return ""

    text = strip_wikitext_markup(fragment)
    text = NAKED_URL.sub("", text)

    text = COMMENT.sub("", text)
    text = REF_BLOCK.sub("", text)
    text = TAG.sub("", text)
    text = html.unescape(text)

    text = EMPHASIS.sub("", text)
    text = LIST_MARKER.sub("", text)
    return WHITESPACE.sub(" ", text).strip()
