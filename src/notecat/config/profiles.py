"""Configuration profile management.

Selects the configuration profile from the environment.
"""

import os
from enum import Enum
from pathlib import Path

# config/ in the project root (src/notecat/config/profiles.py -> project root)
DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"


class Profile(Enum):
    """Available configuration profiles."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


def detect_profile() -> Profile:
    """Detect appropriate configuration profile.

    Uses the NOTECAT_PROFILE environment variable, defaulting to dev.

    Returns:
        Profile enum value
    """
    env_profile = os.environ.get("NOTECAT_PROFILE", "").strip().lower()
    for profile in Profile:
        if profile.value == env_profile:
            return profile
    return Profile.DEV


def get_profile_path(profile: Profile | None = None, config_dir: Path | None = None) -> Path:
    """Get path to profile configuration file.

    Args:
        profile: Profile to use, or None to auto-detect
        config_dir: Configuration directory, or None for default

    Returns:
        Path to profile YAML file
    """
    if profile is None:
        profile = detect_profile()

    return (config_dir or DEFAULT_CONFIG_DIR) / f"{profile.value}.yaml"


__all__ = [
    "DEFAULT_CONFIG_DIR",
    "Profile",
    "detect_profile",
    "get_profile_path",
]
