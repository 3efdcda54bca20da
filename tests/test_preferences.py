"""Tests for the preference store and first-run setup."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from news_retriever.news.exceptions import PreferencesError
from news_retriever.preferences.store import (
    PreferenceSetup,
    Preferences,
    SetupState,
    load_or_create,
    load_preferences,
    save_preferences,
)


def make_prompt(*answers: str) -> MagicMock:
    return MagicMock(side_effect=list(answers))


class TestPreferenceFile:
    """Test reading and writing the preferences file."""

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"

        save_preferences(Preferences(api_key="abc123", country="de"), path)
        loaded = load_preferences(path)

        assert loaded is not None
        assert loaded.api_key == "abc123"
        assert loaded.country == "de"
        assert loaded.valid is True

    def test_file_format(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"

        save_preferences(Preferences(api_key="abc123", country="de"), path)

        assert json.loads(path.read_text()) == {
            "APIKey": "abc123",
            "Country": "de",
            "Valid": True,
        }

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "preferences.json"

        save_preferences(Preferences(api_key="k", country="us"), path)

        assert path.exists()

    def test_load_missing_file(self, tmp_path: Path) -> None:
        assert load_preferences(tmp_path / "missing.json") is None

    def test_load_ignores_stored_valid_flag(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"APIKey": "k", "Country": "us", "Valid": False}))

        loaded = load_preferences(path)

        assert loaded == Preferences(api_key="k", country="us", valid=True)

    def test_load_without_key_is_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"Country": "us"}))

        loaded = load_preferences(path)

        assert loaded is not None
        assert loaded.valid is False

    def test_load_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        path.write_text("{not json")

        with pytest.raises(PreferencesError, match="Failed to read preferences"):
            load_preferences(path)

    def test_load_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        path.write_text("[1, 2]")

        with pytest.raises(PreferencesError, match="not a JSON object"):
            load_preferences(path)


    @pytest.mark.parametrize("stored", [None, "", "xx", "usa"])
    def test_load_unsupported_country_uses_default(
        self, tmp_path: Path, stored: str | None
    ) -> None:
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"APIKey": "k", "Country": stored}))

        loaded = load_preferences(path, default_country="ie")

        assert loaded == Preferences(api_key="k", country="ie", valid=True)

    def test_load_uppercase_country(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"APIKey": "k", "Country": "US"}))

        loaded = load_preferences(path)

        assert loaded is not None
        assert loaded.country == "us"


class TestPreferenceSetup:
    """Test the interactive first-run flow."""

    def setup_method(self) -> None:
        self.client = MagicMock()
        self.client.validate_api_key.return_value = True

    def test_initial_state(self) -> None:
        setup = PreferenceSetup(self.client, make_prompt())

        assert setup.state is SetupState.NO_CONFIG

    def test_valid_key_and_country(self) -> None:
        setup = PreferenceSetup(self.client, make_prompt(" abc123\n", "FR"))

        preferences = setup.run()

        assert preferences == Preferences(api_key="abc123", country="fr", valid=True)
        assert setup.state is SetupState.VALIDATED
        self.client.validate_api_key.assert_called_once_with("abc123")

    def test_empty_country_uses_default(self) -> None:
        setup = PreferenceSetup(
            self.client, make_prompt("abc123", ""), default_country="ie"
        )

        assert setup.run().country == "ie"

    def test_rejected_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        self.client.validate_api_key.return_value = False
        setup = PreferenceSetup(self.client, make_prompt("bad", "us"))

        preferences = setup.run()

        assert preferences.valid is False
        assert setup.state is SetupState.INVALID
        assert "Invalid API Key!" in capsys.readouterr().out

    @pytest.mark.parametrize("country", ["usa", "zz", "u"])
    def test_invalid_country(
        self, country: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup = PreferenceSetup(self.client, make_prompt("abc123", country))

        preferences = setup.run()

        assert preferences.valid is False
        assert setup.state is SetupState.INVALID
        assert "Invalid country code" in capsys.readouterr().out
        self.client.validate_api_key.assert_not_called()


    def test_end_of_input_at_key_prompt(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup = PreferenceSetup(self.client, MagicMock(side_effect=EOFError))

        preferences = setup.run()

        assert preferences.valid is False
        assert setup.state is SetupState.INVALID
        assert "setup aborted" in capsys.readouterr().out
        self.client.validate_api_key.assert_not_called()

    def test_end_of_input_at_country_prompt(self) -> None:
        prompt = MagicMock(side_effect=["abc123", EOFError()])
        setup = PreferenceSetup(self.client, prompt)

        preferences = setup.run()

        assert preferences.valid is False
        assert setup.state is SetupState.INVALID


class TestLoadOrCreate:
    """Test loading stored preferences or creating them on first run."""

    def setup_method(self) -> None:
        self.client = MagicMock()
        self.client.validate_api_key.return_value = True

    def test_existing_file_is_not_revalidated(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        save_preferences(Preferences(api_key="k", country="us"), path)
        prompt = make_prompt()

        preferences = load_or_create(path, self.client, prompt)

        assert preferences == Preferences(api_key="k", country="us")
        prompt.assert_not_called()
        self.client.validate_api_key.assert_not_called()

    def test_first_run_persists_valid_preferences(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"

        preferences = load_or_create(path, self.client, make_prompt("abc", "gb"))

        assert preferences.valid is True
        assert load_preferences(path) == preferences

    def test_first_run_does_not_persist_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "preferences.json"
        self.client.validate_api_key.return_value = False

        preferences = load_or_create(path, self.client, make_prompt("bad", "gb"))

        assert preferences.valid is False
        assert not path.exists()
