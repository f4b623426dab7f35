"""Unit tests for the settings store, credentials and user settings."""

import json
import os
import tempfile
from pathlib import Path
from unittest import mock

from notecat.config import SettingsConfig
from notecat.config.settings import (
    API_KEYS_KEY,
    SETTINGS_KEY,
    ProviderCredentials,
    UserSettings,
)
from notecat.config.store import JSONFileStore, MemoryStore


class TestJSONFileStore:
    """Tests for the JSON file store."""

    def test_missing_file_loads_empty(self) -> None:
        """Test a missing file gives an empty dict."""
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JSONFileStore(Path(tmpdir) / "store.json")
            assert store.load() == {}

    def test_save_creates_file_and_directory(self) -> None:
        """Test saving creates parent directories."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "store.json"
            store = JSONFileStore(path)

            assert store.save("settings", {"ai_enabled": True})
            assert json.loads(path.read_text()) == {"settings": {"ai_enabled": True}}

    def test_save_keeps_other_keys(self) -> None:
        """Test saving one key leaves the others in place."""
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JSONFileStore(Path(tmpdir) / "store.json")
            store.save("a", 1)
            store.save("b", 2)
            assert store.load() == {"a": 1, "b": 2}

    def test_invalid_json_loads_empty(self) -> None:
        """Test a corrupt file gives an empty dict."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "store.json"
            path.write_text("{not json")
            assert JSONFileStore(path).load() == {}

    def test_non_object_loads_empty(self) -> None:
        """Test a file holding a list is ignored."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "store.json"
            path.write_text("[1, 2]")
            assert JSONFileStore(path).load() == {}

    def test_unserializable_value(self) -> None:
        """Test values that cannot be encoded report failure."""
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JSONFileStore(Path(tmpdir) / "store.json")
            assert store.save("bad", object()) is False

    def test_default_path(self) -> None:
        """Test the default location is in the home directory."""
        assert JSONFileStore().path == Path.home() / ".notecat" / "store.json"


class TestMemoryStore:
    """Tests for the in-memory store."""

    def test_round_trip(self) -> None:
        """Test saved values come back from load."""
        store = MemoryStore()
        store.save("k", {"v": 1})
        assert store.load() == {"k": {"v": 1}}

    def test_load_returns_copy(self) -> None:
        """Test mutating the loaded data does not change the store."""
        store = MemoryStore({"k": {"v": 1}})
        store.load()["k"]["v"] = 2
        assert store.load() == {"k": {"v": 1}}


class TestProviderCredentials:
    """Tests for API key storage."""

    def test_set_and_get(self) -> None:
        """Test a stored key is returned trimmed and persisted."""
        store = MemoryStore()
        credentials = ProviderCredentials(store, use_env=False)

        credentials.set("openai", "  sk-123 ")

        assert credentials.get("openai") == "sk-123"
        assert store.load()[API_KEYS_KEY] == {"openai": "sk-123"}

    def test_loaded_from_store(self) -> None:
        """Test keys saved earlier are picked up."""
        store = MemoryStore({API_KEYS_KEY: {"gemini": "g-1"}})
        assert ProviderCredentials(store, use_env=False).get("gemini") == "g-1"

    def test_missing_key_is_empty(self) -> None:
        """Test unknown keys resolve to an empty string."""
        assert ProviderCredentials(MemoryStore(), use_env=False).get("openai") == ""

    def test_environment_fallback(self) -> None:
        """Test environment variables fill in unset keys."""
        with mock.patch.dict(os.environ, {"ANTHROPIC_API_KEY": "env-key"}):
            credentials = ProviderCredentials(MemoryStore())
            assert credentials.get("anthropic") == "env-key"

    def test_stored_key_wins_over_environment(self) -> None:
        """Test a stored key takes precedence."""
        with mock.patch.dict(os.environ, {"OPENAI_API_KEY": "env-key"}):
            credentials = ProviderCredentials(MemoryStore({API_KEYS_KEY: {"openai": "stored"}}))
            assert credentials.get("openai") == "stored"

    def test_environment_ignored_when_disabled(self) -> None:
        """Test use_env=False skips the environment."""
        with mock.patch.dict(os.environ, {"OPENAI_API_KEY": "env-key"}):
            assert ProviderCredentials(MemoryStore(), use_env=False).get("openai") == ""

    def test_clear(self) -> None:
        """Test clearing removes the key."""
        credentials = ProviderCredentials(MemoryStore(), use_env=False)
        credentials.set("gemini", "g-1")
        credentials.clear("gemini")
        assert credentials.get("gemini") == ""

    def test_configured(self) -> None:
        """Test the report lists every known credential key."""
        credentials = ProviderCredentials(MemoryStore({API_KEYS_KEY: {"openai": "sk"}}), use_env=False)
        configured = credentials.configured()

        assert configured["openai"] is True
        assert configured["gemini"] is False
        assert set(configured) >= {"openai", "anthropic", "gemini", "mistral"}


class TestUserSettings:
    """Tests for user settings."""

    def test_defaults(self) -> None:
        """Test defaults apply when nothing is saved."""
        settings = UserSettings(MemoryStore(), SettingsConfig(default_provider="gemini"))

        assert settings.selected_provider == "gemini"
        assert settings.ai_enabled is True
        assert settings.categories[0] == "Work"

    def test_saved_values_win(self) -> None:
        """Test saved settings override defaults."""
        store = MemoryStore(
            {
                SETTINGS_KEY: {
                    "categories": ["Travel"],
                    "ai_enabled": False,
                    "selected_provider": "claude",
                }
            }
        )
        settings = UserSettings(store)

        assert settings.categories == ["Travel"]
        assert settings.ai_enabled is False
        assert settings.selected_provider == "claude"

    def test_add_category(self) -> None:
        """Test adding a category persists it."""
        store = MemoryStore()
        settings = UserSettings(store)

        assert settings.add_category("  Travel ")
        assert "Travel" in settings.categories
        assert "Travel" in store.load()[SETTINGS_KEY]["categories"]

    def test_add_blank_or_duplicate_category(self) -> None:
        """Test blank and existing categories are ignored."""
        settings = UserSettings(MemoryStore())
        before = settings.categories

        assert settings.add_category("   ") is False
        assert settings.add_category("Work") is False
        assert settings.categories == before

    def test_remove_category(self) -> None:
        """Test removing a category."""
        settings = UserSettings(MemoryStore())

        assert settings.remove_category("Ideas")
        assert "Ideas" not in settings.categories
        assert settings.remove_category("Ideas") is False

    def test_categories_is_a_copy(self) -> None:
        """Test the returned list cannot change settings."""
        settings = UserSettings(MemoryStore())
        settings.categories.append("Hacked")
        assert "Hacked" not in settings.categories

    def test_toggle_and_provider_persist(self) -> None:
        """Test changes survive a reload from the same store."""
        store = MemoryStore()
        settings = UserSettings(store)
        settings.set_ai_enabled(False)
        settings.set_selected_provider("mistral")

        reloaded = UserSettings(store)
        assert reloaded.ai_enabled is False
        assert reloaded.selected_provider == "mistral"
