"""
Heading-level navigation over a Wiktionary page.

A page is a sequence of '='-delimited headings; the number of '=' is the
nesting level. The language heading opens a section that runs until the
next heading at the same or a shallower level that names another
language. Inside it, named subsections ("Значение", "Синонимы", ...) run
until the next heading that is not nested below them.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ruwikt.config import Bindings, load_bindings

logger = logging.getLogger(__name__)

HEADING = re.compile(r"^(=+)[ \t]*([^=\s](?:.*?[^=\s])?)[ \t]*\1[ \t]*$", re.MULTILINE)

# "Russian", "Old English", "Serbo-Croatian", "Древнегреческий"
CAPITALIZED_WORDS = re.compile(r"^[A-ZÀ-ÞА-ЯЁ][^\W\d_]*(?:[ -][^\W\d_]+)*$")
# {{-ru-}}, {{-uk-}}, {{-en-}}
LANGUAGE_CODE_TEMPLATE = re.compile(r"^\{\{\s*-[a-z]{2,3}-\s*\}\}$")

TRAILING_NUMBER = re.compile(r"\s+\d+$")


@dataclass(frozen=True)
class Heading:
    """A heading line: level is the count of '=' on each side."""

    level: int
    label: str
    start: int  # offset of the heading line
    end: int  # offset just past the heading line


def iter_headings(text: str) -> list[Heading]:
    """Return all headings in text, in document order."""
    return [
        Heading(level=len(m.group(1)), label=m.group(2), start=m.start(), end=m.end())
        for m in HEADING.finditer(text)
    ]


def label_key(label: str) -> str:
    """Fold a heading label for comparison ("Значение 1" -> "значение")."""
    key = " ".join(label.split()).casefold()
    return TRAILING_NUMBER.sub("", key)


def looks_like_language(label: str) -> bool:
    """True for labels that can open a language section."""
    label = label.strip()
    return bool(CAPITALIZED_WORDS.match(label) or LANGUAGE_CODE_TEMPLATE.match(label))


def language_headings(language: str, bindings: Optional[Bindings] = None) -> tuple[str, ...]:
    """
    Heading spellings accepted for a language.

    Any known spelling of the bound language ("Russian", "Русский",
    "{{-ru-}}") selects all of them.
    """
    bindings = bindings or load_bindings()
    if _heading_matches(language, (bindings.language,) + bindings.language_headings):
        return bindings.language_headings
    return (language,)


def _heading_matches(label: str, accepted: Iterable[str]) -> bool:
    key = label_key(label).replace(" ", "")
    return any(key == label_key(a).replace(" ", "") for a in accepted)


def locate_language_section(
    document: str,
    language: str,
    bindings: Optional[Bindings] = None,
) -> str:
    """
    Extract the section for one language from a page.

    Returns the text between the language heading and the next
    language heading, or "" if the page has no such section.
    """
    if not document:
        return ""

    document = document.replace("\r\n", "\n")
    accepted = language_headings(language, bindings)
    headings = iter_headings(document)

    for i, heading in enumerate(headings):
        if _heading_matches(heading.label, accepted):
            break
    else:
        logger.debug(f"No {language} heading found")
        return ""

    for following in headings[i + 1 :]:
        if following.level <= heading.level and looks_like_language(following.label):
            return document[heading.end : following.start]

    return document[heading.end :]


def find_subsection(section: str, titles: Sequence[str]) -> Optional[str]:
    """
    Return the body of the first heading titled one of `titles`.

    The body runs to the next heading at the same or a shallower level.
    Returns None if no heading matches (an empty body is returned as "").
    """
    wanted = {label_key(t) for t in titles}
    headings = iter_headings(section)

    for i, heading in enumerate(headings):
        if label_key(heading.label) not in wanted:
            continue
        for following in headings[i + 1 :]:
            if following.level <= heading.level:
                return section[heading.end : following.start]
        return section[heading.end :]

    return None
