"""Notes module for the note categorizer.

Provides the note collection with filtering, analytics and capture.
"""

from .analytics import ActivityMetrics
from .errors import DuplicateIdError, NoteStoreError, NotFoundError
from .filters import DateRange, NoteFilter, filter_notes
from .models import Author, Note
from .service import NoteService
from .store import NoteStore

__all__ = [
    "ActivityMetrics",
    "Author",
    "DateRange",
    "DuplicateIdError",
    "Note",
    "NoteFilter",
    "NoteService",
    "NoteStore",
    "NoteStoreError",
    "NotFoundError",
    "filter_notes",
]
