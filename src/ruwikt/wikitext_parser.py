"""
Recursive descent parser for the wikitext found in Wiktionary entries.

Grammar:
    content    ::= (template | wikilink | extlink | char)*
    template   ::= "{{" name ("|" param)* "}}"
    param      ::= inline                      (stops at "|" or "}}")
    wikilink   ::= "[[" target ("#" anchor)? ("|" label)? "]]"
    label      ::= inline                      (stops at "]]")
    extlink    ::= "[" url (" " inline)? "]"   (url starts http://, https:// or //)
    inline     ::= (template | wikilink | char)*

A template nested in a parameter or link label renders as the text it
would show on the page ({{выдел|дом}} -> "дом") or as nothing. At the top
level templates render as nothing and are collected instead.

Unclosed constructs run to the end of input; the parser never raises.
"""

from dataclasses import dataclass, field
from typing import Optional


URL_PREFIXES = ("http://", "https://", "//")

# Templates that show one of their parameters as running text,
# mapped to that parameter's index
TEXT_PARAM = {
    "выдел": 0,
    "w": 0,
    "i": 0,
    "q": 0,
    "qualifier": 0,
    "gloss": 0,
    "l": 1,
    "link": 1,
    "m": 1,
    "mention": 1,
}


@dataclass
class Wikilink:
    """[[target#anchor|display]]"""

    target: str
    anchor: Optional[str] = None
    display: Optional[str] = None

    def text(self) -> str:
        """Text shown on the page: the display label, else the target."""
        return self.display if self.display is not None else self.target


@dataclass
class Template:
    """{{name|param1|param2|...}} with parameters already rendered to text."""

    name: str
    params: list[str] = field(default_factory=list)

    def get_positional(self) -> list[str]:
        """Non-empty parameters without a 'key=' prefix."""
        return [p for p in self.params if "=" not in p and p.strip()]

    def head(self) -> str:
        """First word of the name, lowercased: {{сущ ru m a 1a}} -> 'сущ'."""
        parts = self.name.split()
        return parts[0].lower() if parts else ""

    def rendered(self) -> str:
        """Visible text of the template when it appears inline."""
        index = TEXT_PARAM.get(self.name.lower())
        if index is None or index >= len(self.params):
            return ""
        return self.params[index].strip()


@dataclass
class ParseResult:
    templates: list[Template] = field(default_factory=list)
    text: str = ""


class WikitextParser:
    """
    Usage:
        parser = WikitextParser(text)
        result = parser.parse()      # top-level templates and visible text
        plain = parser.strip_markup()
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos : self.pos + 1]

    def advance(self) -> str:
        ch = self.peek()
        self.pos += 1
        return ch

    def match(self, expected: str) -> bool:
        return self.text.startswith(expected, self.pos)

    def consume_if(self, expected: str) -> bool:
        if self.match(expected):
            self.pos += len(expected)
            return True
        return False

    def read_until(self, stops: str) -> str:
        """Read plain characters up to a stop character or a nested opener."""
        start = self.pos
        while not self.at_end() and self.peek() not in stops:
            if self.match("{{") or self.match("[["):
                break
            self.pos += 1
        return self.text[start : self.pos]

    def at_external_link(self) -> bool:
        return (
            self.match("[")
            and not self.match("[[")
            and self.text.startswith(URL_PREFIXES, self.pos + 1)
        )

    # -------------------------------------------------------------------------
    # Productions
    # -------------------------------------------------------------------------

    def parse(self) -> ParseResult:
        """Parse from the current position to the end of input."""
        result = ParseResult()
        parts = []

        while not self.at_end():
            if self.match("{{"):
                result.templates.append(self.parse_template())
            elif self.match("[["):
                parts.append(self.parse_wikilink().text())
            elif self.at_external_link():
                parts.append(self.parse_external_link())
            else:
                parts.append(self.advance())

        result.text = "".join(parts)
        return result

    def parse_inline(self, *stops: str) -> str:
        """Render inline content up to, not including, any of `stops`."""
        parts = []
        while not self.at_end() and not any(self.match(s) for s in stops):
            if self.match("{{"):
                parts.append(self.parse_template().rendered())
            elif self.match("[["):
                parts.append(self.parse_wikilink().text())
            else:
                parts.append(self.advance())
        return "".join(parts)

    def parse_template(self) -> Template:
        self.consume_if("{{")

        name_parts = []
        while not self.at_end() and not (self.match("|") or self.match("}}")):
            if self.match("{{"):
                # {{{{x}}|...}}: a computed name is not resolvable here
                self.parse_template()
            else:
                name_parts.append(self.advance())

        params = []
        while self.consume_if("|"):
            params.append(self.parse_inline("|", "}}").strip())

        self.consume_if("}}")
        return Template(name="".join(name_parts).strip(), params=params)

    def parse_wikilink(self) -> Wikilink:
        self.consume_if("[[")

        target = self.read_until("#|]")
        anchor = self.read_until("|]") if self.consume_if("#") else None
        display = self.parse_inline("]]") if self.consume_if("|") else None

        self.consume_if("]]")
        return Wikilink(target=target, anchor=anchor, display=display or None)

    def parse_external_link(self) -> str:
        """Return the label of [url label], or "" for a bare [url]."""
        self.consume_if("[")
        while not self.at_end() and self.peek() not in " \t]":
            self.pos += 1

        label = ""
        if self.peek() in (" ", "\t"):
            label = self.parse_inline("]").strip()

        self.consume_if("]")
        return label

    # -------------------------------------------------------------------------
    # Extraction
    # -------------------------------------------------------------------------

    def find_templates(self, *names: str) -> list[Template]:
        """Top-level templates whose name is one of `names` (case-insensitive)."""
        wanted = {n.lower() for n in names}
        return [t for t in self.parse().templates if t.name.lower() in wanted]

    def strip_markup(self) -> str:
        """
        Visible text of the whole input.

        Wikilinks become their label or target, external links their label,
        and templates are removed at any nesting depth. Stray brackets left
        by malformed markup are dropped.
        """
        self.pos = 0
        text = self.parse().text
        for stray in ("[[", "]]", "{{", "}}"):
            text = text.replace(stray, "")
        return text.strip()


def strip_wikitext_markup(text: str) -> str:
    return WikitextParser(text).strip_markup()


def find_templates(text: str, *names: str) -> list[Template]:
    return WikitextParser(text).find_templates(*names)


def all_templates(text: str) -> list[Template]:
    """Every top-level template in text, in document order."""
    return WikitextParser(text).parse().templates
