"""
Field extractors for a single language section.

Each extractor works on the raw (uncleaned) section text, selects the
lines or fragments it needs, and cleans only those. Every extractor takes
the first qualifying match in document order and returns PLACEHOLDER when
nothing qualifies; none of them raise on malformed markup.
"""

import re
from typing import Iterable, Optional, Sequence

from ruwikt.cleaner import clean_markup
from ruwikt.config import PLACEHOLDER, Bindings, load_bindings
from ruwikt.sections import find_subsection, iter_headings, label_key
from ruwikt.wikitext_parser import Template, all_templates, find_templates

# "# definition", but not "#:" / "#*" / "##" sub-lines
DEFINITION_LINE = re.compile(r"^#(?![#:*;])[ \t]*(.*)$", re.MULTILINE)
# any list or definition-list line
LIST_LINE = re.compile(r"^[#*:;]+[ \t]*(.*)$", re.MULTILINE)
# "#: example" / "##: example" lines attached to a definition
EXAMPLE_LINE = re.compile(r"^#+:(?![*:])[ \t]*(.*)$", re.MULTILINE)

# "== дом I ==" style homonym headings
HOMONYM_HEADING = re.compile(r"\s+[IVX]+$")
# dash- or punctuation-only items mean "no entry" in synonym lists
NO_CONTENT = re.compile(r"^[\W_]+$")
LANGUAGE_CODE = re.compile(r"^[a-z]{2,3}$")
REPEATED_SEPARATOR = re.compile(r"(?:\s*,\s*){2,}")


# =============================================================================
# Part of speech
# =============================================================================


def _is_meta_label(label: str, bindings: Bindings) -> bool:
    return label_key(label) in bindings.meta_labels or bool(HOMONYM_HEADING.search(label))


def part_of_speech_from_templates(section: str, bindings: Bindings) -> Optional[str]:
    """Map the first inflection-table template ({{сущ ru ...}}) to a POS name."""
    for template in all_templates(section):
        pos = bindings.part_of_speech_for(template.head())
        if pos:
            return pos
    return None


def extract_part_of_speech(section: str, bindings: Optional[Bindings] = None) -> str:
    """
    Return the label of the first non-meta heading one level below the
    language heading.

    Headings such as "Морфологические и синтаксические свойства" describe
    the entry rather than name its part of speech; they are skipped in
    favour of the next heading at the same level. When every heading at
    that level is a meta label, the inflection template decides.
    """
    bindings = bindings or load_bindings()
    headings = iter_headings(section)

    if headings:
        top_level = min(h.level for h in headings)
        for heading in headings:
            if heading.level != top_level:
                continue
            label = clean_markup(heading.label)
            if label and not _is_meta_label(label, bindings):
                return label

    return part_of_speech_from_templates(section, bindings) or PLACEHOLDER


# =============================================================================
# Definition
# =============================================================================


def first_definition_line(text: str) -> Optional[str]:
    """First numbered definition line whose cleaned text is non-empty."""
    for match in DEFINITION_LINE.finditer(text):
        cleaned = clean_markup(match.group(1))
        if cleaned:
            return cleaned
    return None


def extract_definition(section: str, bindings: Optional[Bindings] = None) -> str:
    """Return the first definition, preferring the "Значение" subsection."""
    bindings = bindings or load_bindings()

    meaning = find_subsection(section, bindings.meaning_titles)
    if meaning is not None:
        definition = first_definition_line(meaning)
        if definition:
            return definition

    return first_definition_line(section) or PLACEHOLDER


# =============================================================================
# Synonyms
# =============================================================================


def _reintroduces_label(item: str, labels: Iterable[str]) -> bool:
    folded = item.casefold()
    return any(folded.startswith(label.casefold()) for label in labels)


def extract_synonyms(section: str, bindings: Optional[Bindings] = None) -> tuple[str, ...]:
    """
    Return cleaned synonym list items from the "Синонимы" subsection.

    Items that clean to nothing, hold only a dash, or start an "Антонимы"
    label (a section that lost its heading) are dropped.
    """
    bindings = bindings or load_bindings()

    body = find_subsection(section, bindings.synonym_titles)
    if not body:
        return ()

    items = []
    for match in LIST_LINE.finditer(body):
        cleaned = clean_markup(match.group(1))
        if not cleaned or NO_CONTENT.match(cleaned):
            continue
        if _reintroduces_label(cleaned, bindings.antonym_titles):
            continue
        items.append(cleaned)
    return tuple(items)


def join_synonyms(items: Sequence[str]) -> str:
    """Join synonyms with ", " without producing empty or doubled separators."""
    joined = ", ".join(item.strip() for item in items if item and item.strip())
    joined = REPEATED_SEPARATOR.sub(", ", joined)
    return joined.strip(" ,")


# =============================================================================
# Usage examples
# =============================================================================


def example_from_template(template: Template) -> str:
    """Return the example sentence carried by {{пример|...}} or {{ux|ru|...}}."""
    positional = template.get_positional()
    if len(positional) > 1 and LANGUAGE_CODE.match(positional[0]):
        positional = positional[1:]
    return clean_markup(positional[0]) if positional else ""


def extract_examples(section: str, bindings: Optional[Bindings] = None) -> tuple[str, str]:
    """
    Return up to two usage examples, PLACEHOLDER for missing slots.

    Sources, in order, until two are found:
    1. list lines of the "Примеры употребления" (else "Примеры") subsection
    2. "#:" example lines anywhere in the section
    3. example templates on definition lines
    """
    bindings = bindings or load_bindings()
    found: list[str] = []

    def add(candidate: str) -> None:
        if candidate and candidate not in found:
            found.append(candidate)

    # an empty "Примеры употребления" falls through to "Примеры"
    for titles in (bindings.usage_example_titles, bindings.example_titles):
        body = find_subsection(section, titles) or ""
        for match in LIST_LINE.finditer(body):
            add(clean_markup(match.group(1)))
        if found:
            break

    if len(found) < 2:
        for match in EXAMPLE_LINE.finditer(section):
            add(clean_markup(match.group(1)))

    if len(found) < 2:
        for template in find_templates(section, *bindings.example_templates):
            add(example_from_template(template))

    found.extend([PLACEHOLDER, PLACEHOLDER])
    return found[0], found[1]
