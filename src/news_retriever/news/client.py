"""NewsAPI HTTP client using requests."""

import sys
from typing import Optional
from urllib.parse import urlencode

import requests

from news_retriever.config.settings import Config
from news_retriever.news.constants import HEADLINES_PATH
from news_retriever.news.exceptions import (
    NewsApiConnectionError,
    NewsApiHTTPError,
    ResponseDecodeError,
)
from news_retriever.news.models import ArticleCollection
from news_retriever.utils.logging import get_logger


class NewsApiClient:
    """Issues single, blocking GET requests against NewsAPI."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            config: Configuration instance
            session: Optional session to reuse; one is created otherwise
        """
        self.config = config
        self.logger = get_logger("news.client")
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def _get(self, url: str) -> requests.Response:
        try:
            return self.session.get(url, timeout=self.config.timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise NewsApiConnectionError(f"Request failed: {e}") from e

    def fetch(self, url: str) -> ArticleCollection:
        """Fetch and decode one page of articles.

        Args:
            url: Fully built request URL, including the API key

        Returns:
            Articles in the order the service returned them

        Raises:
            NewsApiHTTPError: If the status is not 2xx
            NewsApiConnectionError: If the request could not be completed
            ResponseDecodeError: If the body is not a JSON article list
        """
        self.logger.debug(f"GET {url.split('?')[0]}")
        response = self._get(url)

        if not 200 <= response.status_code < 300:
            self.logger.info(f"NewsAPI returned status {response.status_code}")
            raise NewsApiHTTPError(response.status_code, url)

        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Response is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ResponseDecodeError("Response is not a JSON object")

        try:
            articles = ArticleCollection.from_json(payload)
        except ValueError as e:
            raise ResponseDecodeError(f"Unexpected response shape: {e}") from e

        self.logger.info(f"Fetched {len(articles)} articles")
        return articles

    def validate_api_key(self, api_key: str, country: str | None = None) -> bool:
        """Check an API key with a live headlines request.

        Args:
            api_key: Key to check
            country: Country filter for the test request

        Returns:
            True if NewsAPI accepted the key, False otherwise
        """
        if not api_key:
            return False

        query = urlencode(
            [
                ("country", country or self.config.validation_country),
                ("apiKey", api_key),
            ]
        )
        url = f"{self.config.base_url}{HEADLINES_PATH}?{query}"

        try:
            response = self._get(url)
        except NewsApiConnectionError as e:
            self.logger.error(f"API key validation failed: {e}")
            return False

        if response.status_code != 200:
            self.logger.warning(
                f"API key rejected by NewsAPI (status {response.status_code})"
            )
            return False

        return True

    def test_connection(self, api_key: str) -> bool:
        """Test NewsAPI connectivity with a stored key.

        Returns:
            True if connection successful, False otherwise
        """
        ok = self.validate_api_key(api_key)
        if ok:
            self.logger.info("✅ Successfully connected to NewsAPI")
        else:
            self.logger.error("❌ NewsAPI connection failed")
        return ok


def main() -> None:
    """CLI entry point for testing the NewsAPI client."""
    import argparse

    parser = argparse.ArgumentParser(description="NewsAPI client CLI")
    parser.add_argument("--api-key", type=str, required=True, help="Key to test")
    parser.add_argument("--config", type=str, help="Path to configuration file")

    args = parser.parse_args()

    client = NewsApiClient(Config(args.config))
    try:
        success = client.test_connection(args.api_key)
    finally:
        client.close()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
