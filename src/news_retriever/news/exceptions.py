class NewsRetrieverError(Exception):
    """Base class for all news retriever errors."""


class PreferencesError(NewsRetrieverError):
    """Raised when the preferences file cannot be read or written."""


class NewsApiError(NewsRetrieverError):
    """Raised when a NewsAPI request does not produce articles."""


class NewsApiHTTPError(NewsApiError):
    """Raised when NewsAPI answers with a non-2xx status."""

    def __init__(self, status_code: int, url: str = "") -> None:
        super().__init__(f"Error! {status_code}")
        self.status_code = status_code
        self.url = url


class NewsApiConnectionError(NewsApiError):
    """Raised when the request never reaches NewsAPI or times out."""


class ResponseDecodeError(NewsApiError):
    """Raised when a response body is not the expected JSON document."""
