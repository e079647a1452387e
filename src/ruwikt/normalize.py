"""
Headword normalization for incoming lookup queries.

Query strings arrive in several damaged shapes: '+' standing in for spaces,
percent-encoded once or twice, literal \\uXXXX escapes, or UTF-8 Cyrillic
that was decoded one byte at a time as Windows-1252 ("Ð´Ð¾Ð¼" for "дом").
normalize_headword() repairs all of these and never raises.
"""

import logging
import re
from typing import Optional
from urllib.parse import unquote

import ftfy

logger = logging.getLogger(__name__)

# Maximum percent-decoding passes (double-encoded values are common)
MAX_DECODE_PASSES = 2

CYRILLIC = re.compile(r"[\u0400-\u04FF]")

UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")


def has_cyrillic(text: str) -> bool:
    """Return True if text contains at least one Cyrillic character."""
    return bool(CYRILLIC.search(text))


def percent_decode(value: str, passes: int = MAX_DECODE_PASSES) -> str:
    """
    Percent-decode up to `passes` times.

    Stops at the first pass that changes nothing or fails to decode as
    UTF-8; the last successful value is kept.
    """
    for _ in range(passes):
        try:
            decoded = unquote(value, errors="strict")
        except UnicodeDecodeError:
            logger.debug(f"Percent-decoding failed, keeping {value!r}")
            break
        if decoded == value:
            break
        value = decoded
    return value


def decode_unicode_escapes(value: str) -> str:
    """Replace literal \\uXXXX sequences with the characters they name."""
    return UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value)


def repair_mojibake(value: str) -> str:
    """
    Undo a single-byte misdecode of UTF-8 Cyrillic text with ftfy.

    Only attempted when the value has no Cyrillic. The fix is adopted only
    if it yields Cyrillic text; anything else ftfy would change is left alone.
    """
    if has_cyrillic(value):
        return value

    repaired = ftfy.fix_text(value)
    if has_cyrillic(repaired):
        logger.debug(f"Repaired mojibake {value!r} -> {repaired!r}")
        return repaired

    return value


def normalize_headword(raw: Optional[str]) -> str:
    """
    Turn a raw query value into a clean headword.

    Returns an empty string for empty or unusable input.
    """
    if not raw:
        return ""

    value = raw.replace("+", " ")
    value = percent_decode(value)
    value = decode_unicode_escapes(value)
    value = repair_mojibake(value)
    return value.strip()
