"""Provider protocol, prompts and label normalization.

Defines the closed set of categorization providers and the pieces shared
between their implementations.
"""

import re
from enum import Enum
from typing import Protocol

# Default taxonomy offered to the model
DEFAULT_TAXONOMY: tuple[str, ...] = (
    "Work",
    "Personal",
    "Ideas",
    "Tasks",
    "Meetings",
    "Research",
    "Shopping",
    "Health",
    "Travel",
    "Education",
)

CHAT_SYSTEM_PROMPT = (
    "You are a helpful assistant that categorizes notes. You must respond with a "
    "single word or short phrase that best categorizes the given note. Common "
    "categories include: {taxonomy}. Only respond with the category name, nothing else."
)

COMPLETION_PROMPT = """Categorize this note with a single word or short phrase. Choose from these categories: {taxonomy}. Only respond with the category name, nothing else.

Note: "{content}\""""

_WRAPPER_PATTERN = re.compile(r"^[\"'\[\{]+|[\"'\]\}]+$")
_PREFIX_PATTERN = re.compile(r"^category\s*:\s*", re.IGNORECASE)


class Provider(str, Enum):
    """Known categorization providers."""

    CHATGPT = "chatgpt"
    CLAUDE = "claude"
    GEMINI = "gemini"
    MISTRAL = "mistral"

    @property
    def credential_key(self) -> str:
        """Key the provider's API key is stored under."""
        return _CREDENTIAL_KEYS[self]

    @property
    def display_name(self) -> str:
        """Human readable provider name."""
        return _DISPLAY_NAMES[self]


_CREDENTIAL_KEYS = {
    Provider.CHATGPT: "openai",
    Provider.CLAUDE: "anthropic",
    Provider.GEMINI: "gemini",
    Provider.MISTRAL: "mistral",
}

_DISPLAY_NAMES = {
    Provider.CHATGPT: "OpenAI",
    Provider.CLAUDE: "Claude",
    Provider.GEMINI: "Gemini",
    Provider.MISTRAL: "Mistral",
}


class CategoryProvider(Protocol):
    """Interface for a single categorization provider.

    Implementations issue at most one request per call and return a
    trimmed, non-empty label or raise a CategorizationError.
    """

    @property
    def provider(self) -> Provider:
        """Provider this implementation serves."""
        ...

    def categorize(self, content: str, api_key: str) -> str:
        """Return a category label for the note content.

        Args:
            content: Note text (non-empty)
            api_key: Provider credentials (non-empty)

        Returns:
            Category label

        Raises:
            EmptyResponseError: If no usable label was produced
            TransportError: If the provider call failed
        """
        ...


def parse_provider(value: "Provider | str") -> Provider | None:
    """Resolve a provider selector, returning None when unknown."""
    if isinstance(value, Provider):
        return value
    try:
        return Provider(str(value).strip().lower())
    except ValueError:
        return None


def build_system_prompt(taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY) -> str:
    """Build the chat system instruction."""
    return CHAT_SYSTEM_PROMPT.format(taxonomy=", ".join(taxonomy))


def build_completion_prompt(content: str, taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY) -> str:
    """Build the single-turn prompt for providers without chat roles."""
    return COMPLETION_PROMPT.format(taxonomy=", ".join(taxonomy), content=content)


def normalize_label(text: str) -> str:
    """Clean up a raw model answer into a bare label.

    Strips wrapping quotes or brackets and a leading ``Category:`` prefix.
    Normalizing an already clean label returns it unchanged.

    Args:
        text: Raw model output

    Returns:
        Cleaned label (may be empty)
    """
    label = _WRAPPER_PATTERN.sub("", text.strip()).strip()
    label = _PREFIX_PATTERN.sub("", label)
    # A prefix can sit outside the quotes: Category: "Work"
    label = _WRAPPER_PATTERN.sub("", label.strip())
    return label.strip()


__all__ = [
    "CHAT_SYSTEM_PROMPT",
    "COMPLETION_PROMPT",
    "CategoryProvider",
    "DEFAULT_TAXONOMY",
    "Provider",
    "build_completion_prompt",
    "build_system_prompt",
    "normalize_label",
    "parse_provider",
]
