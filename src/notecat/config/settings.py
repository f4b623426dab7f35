"""User settings and provider credentials.

Both are thin views over a KeyValueStore: reads come from the loaded
snapshot, every change is written straight back.
"""

import logging
import os
from typing import Any

from . import SettingsConfig
from .store import KeyValueStore

logger = logging.getLogger(__name__)

API_KEYS_KEY = "api-keys"
SETTINGS_KEY = "settings"

# Environment fallbacks, keyed by credential key
ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}


class ProviderCredentials:
    """API keys per provider credential key."""

    def __init__(self, store: KeyValueStore, use_env: bool = True) -> None:
        """Initialize credentials.

        Args:
            store: Backing key-value store.
            use_env: Fall back to environment variables for unset keys.
        """
        self._store = store
        self._use_env = use_env
        raw = store.load().get(API_KEYS_KEY) or {}
        self._keys: dict[str, str] = {str(k): str(v) for k, v in raw.items() if v is not None}

    def get(self, credential_key: str) -> str:
        """Get the API key for a credential key.

        Returns:
            The stored key, the environment fallback, or an empty string.
        """
        value = self._keys.get(credential_key, "").strip()
        if not value and self._use_env and credential_key in ENV_VARS:
            value = os.environ.get(ENV_VARS[credential_key], "").strip()
        return value

    def set(self, credential_key: str, value: str) -> None:
        """Store an API key. An empty value clears it."""
        self._keys[credential_key] = value.strip()
        self._store.save(API_KEYS_KEY, dict(self._keys))
        logger.info(f"Updated API key for {credential_key}")

    def clear(self, credential_key: str) -> None:
        """Remove a stored API key."""
        self.set(credential_key, "")

    def configured(self) -> dict[str, bool]:
        """Report which credential keys currently resolve to a value."""
        keys = set(ENV_VARS) | set(self._keys)
        return {key: bool(self.get(key)) for key in sorted(keys)}


class UserSettings:
    """Category list, AI toggle and selected provider."""

    def __init__(self, store: KeyValueStore, defaults: SettingsConfig | None = None) -> None:
        """Initialize settings from the store, falling back to defaults.

        Args:
            store: Backing key-value store.
            defaults: Values used for anything not yet saved.
        """
        defaults = defaults or SettingsConfig()
        self._store = store
        saved: dict[str, Any] = store.load().get(SETTINGS_KEY) or {}

        self._categories: list[str] = list(saved.get("categories", defaults.categories))
        self._ai_enabled = bool(saved.get("ai_enabled", defaults.ai_enabled))
        self._selected_provider = str(saved.get("selected_provider", defaults.default_provider))

    @property
    def categories(self) -> list[str]:
        """Get a copy of the category list."""
        return self._categories.copy()

    @property
    def ai_enabled(self) -> bool:
        """Whether AI categorization is switched on."""
        return self._ai_enabled

    @property
    def selected_provider(self) -> str:
        """Identifier of the provider used for new notes."""
        return self._selected_provider

    def add_category(self, category: str) -> bool:
        """Add a category.

        Returns:
            True if added, False if blank or already present.
        """
        category = category.strip()
        if not category or category in self._categories:
            return False
        self._categories.append(category)
        self._save()
        return True

    def remove_category(self, category: str) -> bool:
        """Remove a category.

        Returns:
            True if removed, False if it was not present.
        """
        if category not in self._categories:
            return False
        self._categories = [c for c in self._categories if c != category]
        self._save()
        return True

    def set_ai_enabled(self, enabled: bool) -> None:
        """Switch AI categorization on or off."""
        self._ai_enabled = enabled
        self._save()

    def set_selected_provider(self, provider: str) -> None:
        """Select the provider used for new notes."""
        self._selected_provider = provider
        self._save()

    def to_dict(self) -> dict[str, Any]:
        """Serialize settings for storage."""
        return {
            "categories": self._categories,
            "ai_enabled": self._ai_enabled,
            "selected_provider": self._selected_provider,
        }

    def _save(self) -> None:
        self._store.save(SETTINGS_KEY, self.to_dict())


__all__ = [
    "API_KEYS_KEY",
    "ENV_VARS",
    "ProviderCredentials",
    "SETTINGS_KEY",
    "UserSettings",
]
