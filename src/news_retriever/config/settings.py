"""Configuration management for the news retriever."""

import copy
import sys
from functools import cached_property
from pathlib import Path
from typing import Any, Final, TypedDict, cast

from news_retriever.news.constants import ALLOWED_COUNTRIES
from news_retriever.utils.toml_handler import TOMLHandler


class ApiConfig(TypedDict):
    base_url: str
    timeout_seconds: float
    validation_country: str


class PreferencesConfig(TypedDict):
    path: str
    default_country: str


class OutputConfig(TypedDict):
    bullet: str


class ConfigDict(TypedDict):
    api: ApiConfig
    preferences: PreferencesConfig
    output: OutputConfig


DEFAULT_CONFIG: Final[ConfigDict] = {
    "api": {
        "base_url": "https://newsapi.org/v2/",
        "timeout_seconds": 10,
        "validation_country": "us",
    },
    "preferences": {
        "path": "preferences.json",
        "default_country": "gb",
    },
    "output": {
        "bullet": " - \t",
    },
}


class Config:
    """Configuration management using an optional TOML file."""

    _config_path: Final[Path | None]
    _data: Final[dict[str, Any]]

    def __init__(
        self,
        config_path: str | Path | None = None,
    ) -> None:
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. When omitted, built-in
                defaults are used.
        """
        self._config_path = Path(config_path) if config_path is not None else None
        self._data = self._get_config_data(self._config_path)

    def _get_config_data(self, config_path: Path | None) -> dict[str, Any]:
        """Load configuration data from the specified TOML file."""
        data = TOMLHandler.load_config(config_path) if config_path else {}
        return deep_merge_dicts(cast(dict[str, Any], DEFAULT_CONFIG), data)

    @cached_property
    def base_url(self) -> str:
        """Base URL of the NewsAPI service, always ending with a slash."""
        url = str(self._data.get("api", {}).get("base_url", ""))
        return url if url.endswith("/") else url + "/"

    @cached_property
    def timeout_seconds(self) -> float:
        """HTTP request timeout in seconds."""
        return float(self._data.get("api", {}).get("timeout_seconds", 10))

    @cached_property
    def validation_country(self) -> str:
        """Country filter used for the one-time API key check."""
        return str(self._data.get("api", {}).get("validation_country", "us"))

    @cached_property
    def preferences_path(self) -> Path:
        """Location of the persisted preferences file."""
        return Path(
            self._data.get("preferences", {}).get("path", "preferences.json")
        )

    @cached_property
    def default_country(self) -> str:
        """Country offered during first-run setup."""
        return str(self._data.get("preferences", {}).get("default_country", "gb"))

    @cached_property
    def bullet(self) -> str:
        """Prefix written before every article title."""
        return str(self._data.get("output", {}).get("bullet", " - \t"))

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration values.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors: list[str] = []

        if self._config_path is not None and not self._config_path.exists():
            errors.append(f"Configuration file not found: {self._config_path}")

        if not self.base_url.startswith(("http://", "https://")):
            errors.append("base_url must be an http(s) URL")

        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be greater than 0")

        if self.default_country not in ALLOWED_COUNTRIES:
            errors.append(f"default_country is not supported: {self.default_country}")

        return len(errors) == 0, errors


def deep_merge_dicts(dict1: dict[str, Any], dict2: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively combine two dictionaries where dict2 overrides values in dict1 for common keys.
    For nested dictionaries, performs a deep merge rather than simple replacement.

    Args:
        dict1 (dict): The base dictionary
        dict2 (dict): The dictionary with overriding values

    Returns:
        dict: A new dictionary with the deeply combined key-value pairs
    """

    result = copy.deepcopy(dict1)

    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dicts(result[key], cast(dict[str, Any], value))
        else:
            result[key] = copy.deepcopy(value)
    return result


def main() -> None:
    """CLI entry point for configuration validation."""
    import argparse

    parser = argparse.ArgumentParser(description="Configuration management")
    parser.add_argument(
        "--validate", action="store_true", help="Validate configuration"
    )
    parser.add_argument("--config", type=str, help="Path to configuration file")

    args = parser.parse_args()

    if args.validate:
        config = Config(args.config)
        is_valid, errors = config.validate()

        if is_valid:
            print("✅ Configuration is valid")
            sys.exit(0)
        else:
            print("❌ Configuration validation failed:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
