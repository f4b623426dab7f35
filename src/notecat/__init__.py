"""Notecat - AI note categorizer.

Notecat captures short notes and files them under a category chosen by
an external AI provider:
- OpenAI chat completions
- Claude messages
- Gemini generateContent
- Mistral (placeholder until implemented)

Notes can be filtered, searched, reordered and summarized (daily trend,
category mix, leaderboard, writing streak).

Usage:
    python -m notecat --profile dev
    python -m notecat --config config/prod.yaml
"""

__version__ = "0.1.0"

from .categorize import CategoryDispatcher, Provider, categorize
from .config import NotecatConfig
from .config.loader import load_config
from .notes import Author, Note, NoteFilter, NoteService, NoteStore

__all__ = [
    "Author",
    "CategoryDispatcher",
    "Note",
    "NoteFilter",
    "NoteService",
    "NoteStore",
    "NotecatConfig",
    "Provider",
    "__version__",
    "categorize",
    "load_config",
]
