"""Key-value persistence for settings and provider credentials.

Values are loaded once on start and written back on every change.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


def _get_default_store_path() -> Path:
    """Get the path to the default store file.

    Returns:
        Path to ~/.notecat/store.json
    """
    return Path.home() / ".notecat" / "store.json"


class KeyValueStore(Protocol):
    """Protocol for keyed settings storage."""

    def load(self) -> dict[str, Any]:
        """Return all stored values."""
        ...

    def save(self, key: str, value: Any) -> bool:
        """Persist a single value, returning True on success."""
        ...


class MemoryStore:
    """In-memory store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def load(self) -> dict[str, Any]:
        return json.loads(json.dumps(self._data))

    def save(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True


class JSONFileStore:
    """Key-value store backed by a single JSON file."""

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize the file store.

        Args:
            path: Path to the JSON file. Defaults to ~/.notecat/store.json
        """
        self._path = Path(path).expanduser() if path is not None else _get_default_store_path()

    @property
    def path(self) -> Path:
        """Get the backing file path."""
        return self._path

    def load(self) -> dict[str, Any]:
        """Load all values from the JSON file.

        Returns:
            Stored values, or an empty dict if the file is missing or invalid.
        """
        if not self._path.exists():
            logger.debug(f"Store not found at {self._path}, using defaults")
            return {}

        try:
            with open(self._path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in store {self._path}: {e}")
            return {}
        except OSError as e:
            logger.error(f"Failed to read store {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Store {self._path} does not contain an object, ignoring")
            return {}
        return data

    def save(self, key: str, value: Any) -> bool:
        """Write one value back to the JSON file.

        Args:
            key: Top-level key to set.
            value: JSON-serializable value.

        Returns:
            True if saved successfully, False otherwise.
        """
        data = self.load()
        data[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError) as e:
            logger.error(f"Failed to save '{key}' to {self._path}: {e}")
            return False

        logger.debug(f"Saved '{key}' to {self._path}")
        return True


__all__ = [
    "JSONFileStore",
    "KeyValueStore",
    "MemoryStore",
]
