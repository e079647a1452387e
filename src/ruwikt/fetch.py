"""
Wikitext retrieval from the MediaWiki API.

The fetcher tries an ordered list of retrieval strategies and returns the
first non-empty document:

    ParseStrategy     action=parse, prop=wikitext         (primary)
    RevisionStrategy  action=query, prop=revisions        (fallback)

Each strategy is one HTTP call with its own timeout. Any failure (status,
timeout, transport, JSON, missing key, empty body) is logged and swallowed
inside the strategy; a page that no strategy can produce is returned as an
empty string, which the rest of the pipeline treats as "not found".
"""

import logging
from typing import Any, Optional, Sequence

import requests

from ruwikt.config import Settings, load_settings

logger = logging.getLogger(__name__)


class RetrievalStrategy:
    """One way of asking the API for a page's wikitext."""

    name = "base"

    def params(self, headword: str) -> dict[str, str]:
        raise NotImplementedError

    def extract(self, data: Any) -> str:
        """Pull the wikitext out of a decoded JSON envelope."""
        raise NotImplementedError

    def retrieve(self, client, settings: Settings, headword: str) -> str:
        """
        Perform the request and return the wikitext, or "" on any failure.

        Args:
            client: Object with a requests-compatible get() method
            settings: Endpoint, timeout and client identity
            headword: Page title to fetch

        Returns:
            Wikitext body, or empty string
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": settings.user_agent,
        }

        try:
            response = client.get(
                settings.api_url,
                params=self.params(headword),
                headers=headers,
                timeout=settings.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning(f"{self.name} request for {headword!r} failed: {e}")
            return ""
        except ValueError as e:
            logger.warning(f"{self.name} response for {headword!r} is not JSON: {e}")
            return ""

        try:
            text = self.extract(data)
        except (KeyError, IndexError, TypeError, AttributeError):
            logger.debug(f"{self.name} response for {headword!r} has no wikitext")
            return ""

        return text if isinstance(text, str) else ""


class ParseStrategy(RetrievalStrategy):
    """Structured parse mode: the wikitext comes back under parse.wikitext."""

    name = "parse"

    def params(self, headword: str) -> dict[str, str]:
        return {
            "action": "parse",
            "page": headword,
            "prop": "wikitext",
            "redirects": "1",
            "format": "json",
            "formatversion": "2",
        }

    def extract(self, data: Any) -> str:
        wikitext = data["parse"]["wikitext"]
        # formatversion=1 wraps the text as {"*": "..."}
        if isinstance(wikitext, dict):
            wikitext = wikitext["*"]
        return wikitext


class RevisionStrategy(RetrievalStrategy):
    """Raw revision mode: latest revision content of the main slot."""

    name = "revisions"

    def params(self, headword: str) -> dict[str, str]:
        return {
            "action": "query",
            "prop": "revisions",
            "rvprop": "content",
            "rvslots": "main",
            "titles": headword,
            "redirects": "1",
            "format": "json",
            "formatversion": "2",
        }

    def extract(self, data: Any) -> str:
        pages = data["query"]["pages"]
        # formatversion=1 keys pages by id
        if isinstance(pages, dict):
            pages = list(pages.values())
        revision = pages[0]["revisions"][0]
        if "slots" in revision:
            slot = revision["slots"]["main"]
            return slot["content"] if "content" in slot else slot["*"]
        return revision["*"]


DEFAULT_STRATEGIES: tuple[RetrievalStrategy, ...] = (ParseStrategy(), RevisionStrategy())


class SourceFetcher:
    """
    Fetch a headword's wikitext, falling back through strategies in order.

    Usage:
        fetcher = SourceFetcher()
        text = fetcher.fetch("дом")   # "" when the page cannot be retrieved
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client=None,
        strategies: Optional[Sequence[RetrievalStrategy]] = None,
    ):
        self.settings = settings or load_settings()
        self.client = client if client is not None else requests
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def fetch(self, headword: str) -> str:
        """Return the wikitext for headword, or "" if every strategy fails."""
        if not headword:
            return ""

        for i, strategy in enumerate(self.strategies):
            if i > 0:
                logger.info(f"Falling back to {strategy.name} for {headword!r}")
            text = strategy.retrieve(self.client, self.settings, headword)
            if text.strip():
                logger.debug(f"Fetched {len(text):,} chars for {headword!r} via {strategy.name}")
                return text

        logger.info(f"No wikitext found for {headword!r}")
        return ""
