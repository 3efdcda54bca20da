"""Command-line entry point for fetching NewsAPI headlines and searches."""

import argparse
import logging
import sys
from typing import Sequence

from news_retriever.config.settings import Config
from news_retriever.news.client import NewsApiClient
from news_retriever.news.constants import DEFAULT_SORT
from news_retriever.news.exceptions import (
    NewsApiConnectionError,
    NewsApiHTTPError,
    PreferencesError,
    ResponseDecodeError,
)
from news_retriever.news.queries import (
    HeadlinesRequest,
    NewsRequest,
    SearchRequest,
    default_request,
)
from news_retriever.preferences.store import Preferences, load_or_create
from news_retriever.utils.logging import setup_logging
from news_retriever.utils.toml_handler import TOMLHandler


class NewsRetriever:
    """Runs one request against NewsAPI and prints the result."""

    def __init__(self, config: Config, client: NewsApiClient | None = None):
        """Initialize the retriever.

        Args:
            config: Configuration instance
            client: Optional preconfigured NewsAPI client
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.client = client if client is not None else NewsApiClient(config)

    def cleanup(self) -> None:
        """Clean up resources."""
        self.client.close()

    def run(
        self,
        request: NewsRequest,
        preferences: Preferences,
        output_file: str | None = None,
    ) -> bool:
        """Fetch articles for ``request`` and write them to stdout.

        HTTP and network failures are reported as a single printed line.

        Args:
            request: Headlines or search request
            preferences: Validated user preferences
            output_file: Optional file to save articles as TOML

        Returns:
            False only if the response could not be decoded
        """
        url = request.build_url(self.config.base_url, preferences)

        try:
            articles = self.client.fetch(url)
        except NewsApiHTTPError as e:
            print(f"Error! {e.status_code}")
            return True
        except NewsApiConnectionError as e:
            print(f"Error! {e}")
            return True
        except ResponseDecodeError as e:
            self.logger.error(f"Could not decode NewsAPI response: {e}")
            return False

        sys.stdout.write(articles.format_lines(self.config.bullet))

        if output_file:
            self.logger.info(f"Saving {len(articles)} articles to {output_file}")
            TOMLHandler.write_articles_toml(articles, output_file)

        return True


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Request flags keep their single-dash spelling (``-keyword=tech``);
    double-dash aliases are accepted too.
    """
    parser = argparse.ArgumentParser(
        prog="news-retriever",
        description="Fetch top headlines or search articles from NewsAPI",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-e",
        dest="search_everything",
        action="store_true",
        help="Search for stories rather than returning the headlines",
    )
    parser.add_argument(
        "-keyword",
        "--keyword",
        dest="keyword",
        default="",
        help="Keyword or phrase to search for",
    )
    parser.add_argument(
        "-country",
        "--country",
        dest="country",
        default=None,
        help="ISO 3166-1 code of the country to get headlines for "
        "(default: your saved preference)",
    )
    parser.add_argument(
        "-category",
        "--category",
        dest="category",
        default="",
        help="Category to get the headlines for",
    )
    parser.add_argument(
        "-from",
        "--from",
        dest="from_date",
        default="",
        help="Date for the oldest article allowed (YYYY-MM-DD)",
    )
    parser.add_argument(
        "-to",
        "--to",
        dest="to_date",
        default="",
        help="Date for the newest article allowed (YYYY-MM-DD)",
    )
    parser.add_argument(
        "-lang",
        "--lang",
        dest="language",
        default="",
        help="ISO-639-1 code of the language to search in",
    )
    parser.add_argument(
        "-sort",
        "--sort",
        dest="sort_by",
        default=DEFAULT_SORT,
        help="Sort order for the articles (relevancy, popularity, publishedAt)",
    )
    parser.add_argument("--config", type=str, help="Path to configuration file")
    parser.add_argument(
        "--preferences", type=str, help="Path to the preferences file"
    )
    parser.add_argument("--output", type=str, help="Save fetched articles to TOML file")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file", type=str, help="Log to file in addition to console"
    )
    parser.add_argument(
        "--test-connection",
        action="store_true",
        help="Check the saved API key against NewsAPI and exit",
    )
    return parser


def build_request(args: argparse.Namespace, preferences: Preferences) -> NewsRequest:
    """Turn parsed arguments into a headlines or search request."""
    if args.search_everything:
        return SearchRequest(
            keywords=args.keyword,
            from_date=args.from_date,
            to_date=args.to_date,
            language=args.language,
            sort_by=args.sort_by,
        )
    return HeadlinesRequest(
        keywords=args.keyword,
        country=args.country if args.country is not None else preferences.country,
        category=args.category,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    retriever: NewsRetriever | None = None

    try:
        # Load configuration
        config = Config(args.config)
        is_valid, errors = config.validate()
        if not is_valid:
            logger.error("Configuration validation failed:")
            for error in errors:
                logger.error(f"  - {error}")
            return 1

        retriever = NewsRetriever(config)

        preferences_path = args.preferences or config.preferences_path
        try:
            preferences = load_or_create(
                preferences_path,
                retriever.client,
                default_country=config.default_country,
            )
        except PreferencesError as e:
            logger.error(str(e))
            return 1

        if not preferences.valid:
            logger.error("Preferences are invalid, exiting")
            return 1

        if args.test_connection:
            return 0 if retriever.client.test_connection(preferences.api_key) else 1

        if argv:
            request = build_request(args, preferences)
        else:
            request = default_request(preferences)

        return 0 if retriever.run(request, preferences, args.output) else 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger.exception("Full error details:")
        return 1
    finally:
        if retriever is not None:
            retriever.cleanup()


def sync_main() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sync_main()
