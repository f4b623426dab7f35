"""Categorization module for the note categorizer.

Provides note categorization through OpenAI, Claude, Gemini, or a
pending placeholder, behind one dispatcher.
"""

from .base import DEFAULT_TAXONOMY, CategoryProvider, Provider, normalize_label
from .dispatcher import CategoryDispatcher, categorize, create_providers
from .errors import (
    CategorizationError,
    ConfigurationError,
    EmptyResponseError,
    TransportError,
)
from .mock import MockCategoryProvider

__all__ = [
    "CategorizationError",
    "CategoryDispatcher",
    "CategoryProvider",
    "ConfigurationError",
    "DEFAULT_TAXONOMY",
    "EmptyResponseError",
    "MockCategoryProvider",
    "Provider",
    "TransportError",
    "categorize",
    "create_providers",
    "normalize_label",
]
