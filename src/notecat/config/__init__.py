"""Configuration module for the note categorizer.

This module provides configuration loading, profile management and the
persisted settings/credential stores.
"""

from dataclasses import dataclass, field


@dataclass
class OpenAIConfig:
    """Chat-completion provider settings."""

    model: str = "gpt-3.5-turbo"
    temperature: float = 0.3
    max_tokens: int = 10
    timeout_seconds: float = 30.0


@dataclass
class ClaudeConfig:
    """Claude provider settings."""

    model: str = "claude-3-haiku-20240307"
    temperature: float = 0.3
    max_tokens: int = 10
    timeout_seconds: float = 30.0


@dataclass
class GeminiConfig:
    """Prompt-completion provider settings."""

    model: str = "gemini-1.5-flash"
    api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 30.0


@dataclass
class ProvidersConfig:
    """Per-provider configuration."""

    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    gemini: GeminiConfig = field(default_factory=GeminiConfig)


@dataclass
class UserConfig:
    """Identity stamped on notes created in this session."""

    name: str = "User Name"
    avatar: str = "/placeholder.svg"


@dataclass
class SettingsConfig:
    """Defaults for user settings before anything has been saved."""

    default_provider: str = "chatgpt"
    ai_enabled: bool = True
    categories: list[str] = field(
        default_factory=lambda: ["Work", "Personal", "Ideas", "Tasks", "Meetings", "Research"]
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    attempts_enabled: bool = False
    attempts_dir: str = "~/.notecat/logs"


@dataclass
class StorageConfig:
    """Location of the key-value store holding settings and API keys."""

    path: str = "~/.notecat/store.json"


@dataclass
class NotecatConfig:
    """Main note categorizer configuration."""

    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    user: UserConfig = field(default_factory=UserConfig)
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


# Public API
__all__ = [
    "ClaudeConfig",
    "GeminiConfig",
    "LoggingConfig",
    "NotecatConfig",
    "OpenAIConfig",
    "ProvidersConfig",
    "SettingsConfig",
    "StorageConfig",
    "UserConfig",
]
