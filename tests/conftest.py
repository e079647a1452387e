"""Pytest configuration and shared fixtures."""
import pytest
import requests

from ruwikt.config import Settings


# Minimal page in the shape the lookup scenarios describe
DOM_PAGE = """\
== Russian ==

=== Существительное ===
{{сущ ru m ina 1c(1)}}

==== Meaning ====
# жилое здание
#: Мы вернулись в [[дом]].

==== Synonyms ====
* строение
* жилище

== Ukrainian ==

=== Іменник ===

==== Meaning ====
# будинок
"""


# Page laid out the way ru.wiktionary.org lays out entries
RU_WIKT_PAGE = """\
= {{-ru-}} =

=== Морфологические и синтаксические свойства ===
{{сущ ru m ina 1c(1)
|основа=дом
}}
{{морфо-ru|дом}}

=== Произношение ===
{{transcriptions-ru|дом|дома́}}

=== Семантические свойства ===

==== Значение ====
# {{помета|устар.}}
# [[жилой|жилое]] [[здание]] {{пример|Он жил в большом '''доме'''.|Автор=}} <!-- основное -->
# [[семья]], [[хозяйство]] {{пример|Весь {{выдел|дом}} спал.}}

==== Синонимы ====
# [[строение]], [[здание]]
# [[семья]]

==== Антонимы ====
# —

=== Перевод ===
{{перев-блок|жилое здание
|en=[[house]]
}}

= {{-uk-}} =

=== Морфологические и синтаксические свойства ===
{{сущ uk m ina 1a}}

==== Значение ====
# [[будинок]]
"""


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeClient:
    """Records get() calls and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(
            {"url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        if not self.responses:
            raise requests.ConnectionError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def parse_payload(wikitext):
    """action=parse envelope (formatversion=2)."""
    return FakeResponse({"parse": {"title": "x", "pageid": 1, "wikitext": wikitext}})


def revisions_payload(wikitext):
    """action=query&prop=revisions envelope (formatversion=2)."""
    return FakeResponse(
        {
            "query": {
                "pages": [
                    {
                        "pageid": 1,
                        "title": "x",
                        "revisions": [
                            {"slots": {"main": {"contentmodel": "wikitext", "content": wikitext}}}
                        ],
                    }
                ]
            }
        }
    )


def missing_page_payload():
    """Error envelope returned by action=parse for a page that does not exist."""
    return FakeResponse(
        {"error": {"code": "missingtitle", "info": "The page you specified doesn't exist."}}
    )


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def dom_page():
    return DOM_PAGE


@pytest.fixture
def ru_wikt_page():
    return RU_WIKT_PAGE
