"""
The lexical entry record and its formatter.

format_entry() is the only place that turns missing fields into the
PLACEHOLDER; everything downstream can rely on every field being a
non-empty string.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import orjson

from ruwikt.config import PLACEHOLDER
from ruwikt.extractors import join_synonyms


@dataclass(frozen=True)
class LexicalEntry:
    """A looked-up word with its extracted fields."""

    headword: str = PLACEHOLDER
    part_of_speech: str = PLACEHOLDER
    definition: str = PLACEHOLDER
    synonyms: str = PLACEHOLDER
    example1: str = PLACEHOLDER
    example2: str = PLACEHOLDER

    @property
    def is_empty(self) -> bool:
        """True when no field beyond the headword was resolved."""
        return all(
            value == PLACEHOLDER
            for value in (
                self.part_of_speech,
                self.definition,
                self.synonyms,
                self.example1,
                self.example2,
            )
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "headword": self.headword,
            "partOfSpeech": self.part_of_speech,
            "definition": self.definition,
            "synonyms": self.synonyms,
            "example1": self.example1,
            "example2": self.example2,
        }

    def to_json(self) -> str:
        return orjson.dumps(self.to_dict()).decode("utf-8")

    def render(self) -> str:
        """Fixed six-line text layout."""
        return "\n".join(
            [
                self.headword,
                f"Part of speech: {self.part_of_speech}",
                f"Definition: {self.definition}",
                f"Synonyms: {self.synonyms}",
                f"Example 1: {self.example1}",
                f"Example 2: {self.example2}",
            ]
        )


def _field(value: Optional[str]) -> str:
    if value is None:
        return PLACEHOLDER
    value = value.strip()
    return value if value else PLACEHOLDER


def format_entry(
    headword: Optional[str],
    part_of_speech: Optional[str] = None,
    definition: Optional[str] = None,
    synonyms: Union[str, Sequence[str], None] = None,
    example1: Optional[str] = None,
    example2: Optional[str] = None,
) -> LexicalEntry:
    """
    Assemble a fully populated LexicalEntry.

    Any field that is None or blank becomes PLACEHOLDER. Synonyms may be
    passed as a sequence of items or as an already-joined string.
    """
    if synonyms is not None and not isinstance(synonyms, str):
        synonyms = join_synonyms(synonyms)

    return LexicalEntry(
        headword=_field(headword),
        part_of_speech=_field(part_of_speech),
        definition=_field(definition),
        synonyms=_field(synonyms),
        example1=_field(example1),
        example2=_field(example2),
    )


def placeholder_entry(headword: Optional[str]) -> LexicalEntry:
    """Entry with every field except the headword unresolved."""
    return format_entry(headword)
