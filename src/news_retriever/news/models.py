"""Core data models for NewsAPI responses."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final, Iterator

import tomli_w

DEFAULT_BULLET: Final = " - \t"


def _field(data: Mapping[str, Any], name: str) -> str:
    """Read a string field by its lowercase or capitalized key."""
    value = data.get(name)
    if value is None:
        value = data.get(name[:1].upper() + name[1:])
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Article:
    """Represents a single article returned by NewsAPI."""

    author: str
    title: str
    description: str
    url: str = ""
    published_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Article":
        """Build an article from one entry of the ``articles`` array."""
        return cls(
            author=_field(data, "author"),
            title=_field(data, "title"),
            description=_field(data, "description"),
            url=_field(data, "url"),
            published_at=_field(data, "publishedAt"),
        )

    def format_line(self, bullet: str = DEFAULT_BULLET) -> str:
        """Render the article as one output line."""
        return f"{bullet}{self.title}\n"

    def to_toml_dict(self) -> dict[str, str]:
        """Convert to dictionary suitable for TOML serialization."""
        result = {
            "title": self.title,
            "author": self.author,
            "description": self.description,
        }
        if self.url:
            result["url"] = self.url
        if self.published_at:
            result["published_at"] = self.published_at
        return result


@dataclass
class ArticleCollection:
    """Ordered collection of articles from a single response."""

    articles: Final[list[Article]]

    def __init__(self, articles: Iterable[Article] | None = None) -> None:
        self.articles = list(articles) if articles is not None else []

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "ArticleCollection":
        """Decode a NewsAPI response body.

        Raises:
            ValueError: If the payload has no list of articles
        """
        raw = payload.get("articles", payload.get("Articles"))
        if not isinstance(raw, list):
            raise ValueError("response has no articles array")

        articles: list[Article] = []
        for entry in raw:
            if not isinstance(entry, Mapping):
                raise ValueError(f"unexpected article entry: {entry!r}")
            articles.append(Article.from_dict(entry))
        return cls(articles)

    def format_lines(self, bullet: str = DEFAULT_BULLET) -> str:
        """Render every article title, one per line, in response order."""
        return "".join(article.format_line(bullet) for article in self.articles)

    def to_toml_string(self) -> str:
        """Convert collection to TOML string format."""
        toml_data = {"articles": [item.to_toml_dict() for item in self.articles]}
        return tomli_w.dumps(toml_data)

    def __len__(self) -> int:
        """Return number of articles."""
        return len(self.articles)

    def __iter__(self) -> Iterator[Article]:
        """Make collection iterable."""
        yield from self.articles

    def titles(self) -> list[str]:
        """Get all titles in response order."""
        return [item.title for item in self.articles]
