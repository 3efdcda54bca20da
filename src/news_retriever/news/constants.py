"""Static allow-lists for NewsAPI query parameters."""

from typing import Final

ALLOWED_COUNTRIES: Final = frozenset(
    {
        "ae", "ar", "at", "au", "be", "bg", "br", "ca", "ch", "cn", "co",
        "cu", "cz", "de", "eg", "fr", "gb", "gr", "hk", "hu", "id", "ie",
        "il", "in", "it", "jp", "kr", "lt", "lv", "ma", "mx", "my", "ng",
        "nl", "no", "nz", "ph", "pl", "pt", "ro", "rs", "ru", "sa", "se",
        "sg", "si", "sk", "th", "tr", "tw", "ua", "us", "ve", "za",
    }
)  # fmt: skip

ALLOWED_CATEGORIES: Final = frozenset(
    {
        "business",
        "entertainment",
        "general",
        "health",
        "science",
        "sports",
        "technology",
    }
)

ALLOWED_LANGUAGES: Final = frozenset(
    {
        "ar", "de", "en", "es", "fr", "he", "it",
        "nl", "no", "pt", "ru", "se", "ud", "zh",
    }
)  # fmt: skip

ALLOWED_SORTS: Final = ("relevancy", "popularity", "publishedAt")

DEFAULT_SORT: Final = "relevancy"

HEADLINES_PATH: Final = "top-headlines"
SEARCH_PATH: Final = "everything"
