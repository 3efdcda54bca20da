"""Builds NewsAPI query URLs from command-line options.

Each optional field is passed through its allow-list. Values that are not
recognized are dropped from the query rather than rejected, so a typo in
``-category`` simply widens the search.
"""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

from news_retriever.news.constants import (
    ALLOWED_CATEGORIES,
    ALLOWED_COUNTRIES,
    ALLOWED_LANGUAGES,
    ALLOWED_SORTS,
    DEFAULT_SORT,
    HEADLINES_PATH,
    SEARCH_PATH,
)
from news_retriever.preferences.store import Preferences
from news_retriever.utils.logging import get_logger

logger = get_logger("news.queries")

QueryParams = list[tuple[str, str]]


def _is_iso_date(value: str) -> bool:
    try:
        datetime.fromisoformat(value)
        return True
    except ValueError:
        return False


def _with_api_key(params: QueryParams, preferences: Preferences) -> QueryParams:
    return params + [("apiKey", preferences.api_key)]


@dataclass(frozen=True)
class HeadlinesRequest:
    """Query for the current top headlines."""

    keywords: str = ""
    country: str = ""
    category: str = ""

    path = HEADLINES_PATH

    def to_params(self, preferences: Preferences) -> QueryParams:
        params: QueryParams = []

        if self.keywords:
            params.append(("q", self.keywords))

        if self.country in ALLOWED_COUNTRIES:
            params.append(("country", self.country))
        else:
            if self.country:
                logger.debug(
                    f"Unknown country {self.country!r}, using {preferences.country!r}"
                )
            params.append(("country", preferences.country))

        if self.category in ALLOWED_CATEGORIES:
            params.append(("category", self.category))
        elif self.category:
            logger.debug(f"Dropping unknown category {self.category!r}")

        return _with_api_key(params, preferences)

    def build_url(self, base_url: str, preferences: Preferences) -> str:
        return f"{base_url}{self.path}?{urlencode(self.to_params(preferences))}"


@dataclass(frozen=True)
class SearchRequest:
    """Query across every indexed article."""

    keywords: str = ""
    from_date: str = ""
    to_date: str = ""
    language: str = ""
    sort_by: str = DEFAULT_SORT

    path = SEARCH_PATH

    def to_params(self, preferences: Preferences) -> QueryParams:
        params: QueryParams = []

        if self.keywords:
            params.append(("q", self.keywords))

        for name, value in (("from", self.from_date), ("to", self.to_date)):
            if value and _is_iso_date(value):
                params.append((name, value))
            elif value:
                logger.debug(f"Dropping malformed {name} date {value!r}")

        if len(self.language) == 2 and self.language in ALLOWED_LANGUAGES:
            params.append(("language", self.language))
        elif self.language:
            logger.debug(f"Dropping unknown language {self.language!r}")

        if self.sort_by in ALLOWED_SORTS:
            params.append(("sortBy", self.sort_by))
        elif self.sort_by:
            logger.debug(f"Dropping unknown sort order {self.sort_by!r}")

        return _with_api_key(params, preferences)

    def build_url(self, base_url: str, preferences: Preferences) -> str:
        return f"{base_url}{self.path}?{urlencode(self.to_params(preferences))}"


NewsRequest = HeadlinesRequest | SearchRequest


def default_request(preferences: Preferences) -> HeadlinesRequest:
    """Headlines for the preferred country with no other filters."""
    return HeadlinesRequest(country=preferences.country)
