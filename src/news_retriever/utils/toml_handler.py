"""TOML handling utilities."""

import tomllib
from pathlib import Path
from typing import Any

from news_retriever.news.models import Article, ArticleCollection


class TOMLHandler:
    """Handles TOML parsing and writing operations."""

    @staticmethod
    def load_config(config_path: str | Path) -> dict[str, Any]:
        """Load configuration from TOML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            return {}

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    @staticmethod
    def parse_articles_toml(toml_content: str) -> ArticleCollection:
        """Parse TOML written by ``write_articles_toml`` back into articles."""
        try:
            data = tomllib.loads(toml_content)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse TOML content: {e}") from e

        return ArticleCollection(
            Article(
                author=item.get("author", ""),
                title=item.get("title", ""),
                description=item.get("description", ""),
                url=item.get("url", ""),
                published_at=item.get("published_at", ""),
            )
            for item in data.get("articles", [])
        )

    @staticmethod
    def write_articles_toml(
        collection: ArticleCollection, output_path: str | Path
    ) -> None:
        """Write an ArticleCollection to a TOML file."""
        output_path = Path(output_path)
        toml_content = collection.to_toml_string()

        # Ensure directory exists
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(toml_content)
