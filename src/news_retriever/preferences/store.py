"""Persisted user preferences and the first-run setup flow."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from news_retriever.news.constants import ALLOWED_COUNTRIES
from news_retriever.news.exceptions import PreferencesError
from news_retriever.utils.logging import get_logger

if TYPE_CHECKING:
    from news_retriever.news.client import NewsApiClient

logger = get_logger("preferences.store")

Prompt = Callable[[str], str]


@dataclass(frozen=True)
class Preferences:
    """API key and default country for one run."""

    api_key: str
    country: str
    valid: bool = True

    def to_json_dict(self) -> dict[str, str | bool]:
        return {"APIKey": self.api_key, "Country": self.country, "Valid": self.valid}


INVALID_PREFERENCES = Preferences(api_key="", country="", valid=False)


def load_preferences(
    path: str | Path, default_country: str = "gb"
) -> Optional[Preferences]:
    """Read preferences from disk.

    The stored record is trusted as-is; it is not re-validated against
    NewsAPI. A missing or unsupported country is replaced by
    ``default_country``.

    Args:
        path: Location of the preferences JSON file
        default_country: Country used when the stored one is unusable

    Returns:
        Preferences, or None if the file does not exist

    Raises:
        PreferencesError: If the file cannot be read or decoded
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PreferencesError(f"Failed to read preferences from {path}: {e}") from e

    if not isinstance(data, dict):
        raise PreferencesError(f"Preferences file {path} is not a JSON object")

    api_key = str(data.get("APIKey") or "").strip()
    country = str(data.get("Country") or "").strip().lower()
    if country not in ALLOWED_COUNTRIES:
        logger.warning(
            f"Stored country {country!r} is not supported, using {default_country!r}"
        )
        country = default_country
    return Preferences(api_key=api_key, country=country, valid=bool(api_key))


def save_preferences(preferences: Preferences, path: str | Path) -> None:
    """Write preferences to disk as JSON.

    Raises:
        PreferencesError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(preferences.to_json_dict(), f, indent=2)
    except OSError as e:
        raise PreferencesError(f"Failed to write preferences to {path}: {e}") from e


class SetupState(Enum):
    NO_CONFIG = "no_config"
    PROMPTING = "prompting"
    VALIDATED = "validated"
    INVALID = "invalid"


class PreferenceSetup:
    """Interactive first-run setup.

    Moves from ``NO_CONFIG`` through ``PROMPTING`` to either ``VALIDATED`` or
    ``INVALID``. Console I/O goes through the injected ``prompt`` callable.
    """

    def __init__(
        self,
        client: "NewsApiClient",
        prompt: Optional[Prompt] = None,
        default_country: str = "gb",
    ) -> None:
        self.client = client
        self.prompt = prompt if prompt is not None else input
        self.default_country = default_country
        self.state = SetupState.NO_CONFIG

    def run(self) -> Preferences:
        """Prompt for an API key and country, then validate both.

        Returns:
            Preferences with ``valid`` set according to the outcome
        """
        self.state = SetupState.PROMPTING

        try:
            api_key = self.prompt("Enter API Key: ").strip()
            country = (
                self.prompt(f"Enter default country code [{self.default_country}]: ")
                .strip()
                .lower()
                or self.default_country
            )
        except EOFError:
            print("\nNo input available, setup aborted.")
            return self._fail()

        if len(country) != 2 or country not in ALLOWED_COUNTRIES:
            print(f"\nInvalid country code: {country}")
            return self._fail()

        if not self.client.validate_api_key(api_key):
            print("\nInvalid API Key!")
            return self._fail()

        self.state = SetupState.VALIDATED
        return Preferences(api_key=api_key, country=country, valid=True)

    def _fail(self) -> Preferences:
        self.state = SetupState.INVALID
        return INVALID_PREFERENCES


def load_or_create(
    path: str | Path,
    client: "NewsApiClient",
    prompt: Optional[Prompt] = None,
    default_country: str = "gb",
) -> Preferences:
    """Load stored preferences, running first-time setup when none exist.

    Only validated preferences are written to disk.

    Raises:
        PreferencesError: If an existing file is unreadable or saving fails
    """
    preferences = load_preferences(path, default_country)
    if preferences is not None:
        logger.debug(f"Loaded preferences from {path}")
        return preferences

    logger.info(f"No preferences found at {path}, starting setup")
    preferences = PreferenceSetup(client, prompt, default_country).run()

    if preferences.valid:
        save_preferences(preferences, path)
        logger.info(f"Saved preferences to {path}")

    return preferences
