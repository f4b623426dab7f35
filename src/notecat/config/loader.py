"""YAML configuration loading.

Profile files may name a parent with ``extends: <file>``; the parent is
loaded first and the child's sections are merged over it, key by key.
The merged document is then mapped onto the typed config dataclasses.
"""

from pathlib import Path
from typing import Any

import yaml

from . import (
    ClaudeConfig,
    GeminiConfig,
    LoggingConfig,
    NotecatConfig,
    OpenAIConfig,
    ProvidersConfig,
    SettingsConfig,
    StorageConfig,
    UserConfig,
)
from .profiles import Profile, detect_profile, get_profile_path


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Nested dicts are merged recursively; any other value in override,
    lists included, replaces the one in base.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml_with_inheritance(path: Path, _seen: frozenset[Path] = frozenset()) -> dict[str, Any]:
    """Read a YAML file, resolving its ``extends`` chain.

    Raises:
        FileNotFoundError: If the file or a parent is missing.
        ValueError: If the chain loops back on itself.
    """
    path = path.resolve()
    if path in _seen:
        raise ValueError(f"Config inheritance loop at {path}")
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        document = yaml.safe_load(f) or {}

    parent = document.pop("extends", None)
    if parent is None:
        return document

    base = load_yaml_with_inheritance(path.parent / parent, _seen | {path})
    return deep_merge(base, document)


def dict_to_config(data: dict[str, Any]) -> NotecatConfig:
    """Map a merged config document onto NotecatConfig.

    Missing or empty sections take the dataclass defaults. Unknown keys
    inside a section raise TypeError.
    """
    root = data.get("notecat") or {}

    def section(source: dict[str, Any], key: str) -> dict[str, Any]:
        return source.get(key) or {}

    providers = section(root, "providers")

    return NotecatConfig(
        providers=ProvidersConfig(
            openai=OpenAIConfig(**section(providers, "openai")),
            claude=ClaudeConfig(**section(providers, "claude")),
            gemini=GeminiConfig(**section(providers, "gemini")),
        ),
        user=UserConfig(**section(root, "user")),
        settings=SettingsConfig(**section(root, "settings")),
        logging=LoggingConfig(**section(root, "logging")),
        storage=StorageConfig(**section(root, "storage")),
    )


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> NotecatConfig:
    """Load the configuration from a file or a named profile.

    Args:
        path: Config file, used instead of any profile when given
        profile: Profile name ('dev', 'prod', 'test'). Defaults to the
            NOTECAT_PROFILE environment variable, else dev.
        config_dir: Directory holding the profile files

    Returns:
        Parsed NotecatConfig

    Raises:
        FileNotFoundError: If the file or profile does not exist.
        ValueError: If the profile name is unknown.
    """
    if path is None:
        selected = Profile(profile) if profile is not None else detect_profile()
        path = get_profile_path(selected, config_dir)

    return dict_to_config(load_yaml_with_inheritance(Path(path)))


__all__ = [
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
