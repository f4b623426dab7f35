"""Note collection store.

Owns the ordered collection of notes for a session. The order is the
user's display order; it is changed only by append, remove and reorder.
Derived views are recomputed from the current notes on every call.
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import date

from . import analytics
from .errors import DuplicateIdError, NotFoundError
from .filters import NoteFilter, filter_notes
from .models import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """Ordered, id-unique collection of notes.

    Single writer: callers serialize mutations, so no locking is done here.
    """

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        """Initialize the store.

        Args:
            notes: Initial notes in display order (first is shown on top).

        Raises:
            DuplicateIdError: If two initial notes share an id.
        """
        self._notes: list[Note] = []
        self._ids: set[str] = set()
        for note in notes:
            self._check_new_id(note.id)
            self._notes.append(note)
            self._ids.add(note.id)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._ids

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the notes in display order."""
        return tuple(self._notes)

    def get(self, note_id: str) -> Note:
        """Get a note by id.

        Raises:
            NotFoundError: If no note has this id.
        """
        return self._notes[self.index_of(note_id)]

    def index_of(self, note_id: str) -> int:
        """Display position of a note.

        Raises:
            NotFoundError: If no note has this id.
        """
        if note_id in self._ids:
            for index, note in enumerate(self._notes):
                if note.id == note_id:
                    return index
        raise NotFoundError(f"Note {note_id} not found", note_id=note_id)

    def append(self, note: Note) -> None:
        """Add a new note at the top of the display order.

        Raises:
            DuplicateIdError: If a note with the same id exists.
        """
        self._check_new_id(note.id)
        self._notes.insert(0, note)
        self._ids.add(note.id)
        logger.debug(f"Added note {note.id} ({note.category}), {len(self._notes)} notes")

    def remove(self, note_id: str) -> Note:
        """Delete a note.

        Authorization is the caller's concern.

        Returns:
            The removed note.

        Raises:
            NotFoundError: If no note has this id.
        """
        index = self.index_of(note_id)
        note = self._notes.pop(index)
        self._ids.discard(note_id)
        logger.debug(f"Removed note {note_id}, {len(self._notes)} notes")
        return note

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the note at from_index to to_index.

        Notes in between shift by one slot; all other relative orderings
        are kept. Equal indices are a no-op.

        Raises:
            IndexError: If either index is out of range. The order is left
                untouched.
        """
        size = len(self._notes)
        for index in (from_index, to_index):
            if not 0 <= index < size:
                raise IndexError(f"Position {index} out of range for {size} notes")

        if from_index == to_index:
            return

        note = self._notes.pop(from_index)
        self._notes.insert(to_index, note)
        logger.debug(f"Moved note {note.id} from {from_index} to {to_index}")

    def move(self, active_id: str, over_id: str | None) -> None:
        """Move a note onto the position of another (drag and drop).

        Args:
            active_id: Note being dragged.
            over_id: Note it was dropped on. None means dropped outside
                the list, which is a no-op.

        Raises:
            NotFoundError: If either id is unknown.
        """
        if over_id is None or active_id == over_id:
            return
        self.reorder(self.index_of(active_id), self.index_of(over_id))

    # Derived views

    def filter(self, note_filter: NoteFilter | None = None, today: date | None = None) -> list[Note]:
        """Notes matching a filter, in display order."""
        return filter_notes(self._notes, note_filter, today)

    def daily_counts(self, days: int = 7, today: date | None = None) -> dict[date, int]:
        """Notes per day over the trailing window, oldest first."""
        return analytics.daily_counts(self._notes, days, today)

    def category_distribution(self) -> dict[str, int]:
        """Notes per category."""
        return analytics.category_distribution(self._notes)

    def leaderboard(self, limit: int = analytics.LEADERBOARD_SIZE) -> list[tuple[str, int]]:
        """Top authors by note count."""
        return analytics.leaderboard(self._notes, limit)

    def streak(self, today: date | None = None) -> int:
        """Consecutive days with notes, ending today."""
        return analytics.streak(self._notes, today)

    def activity_metrics(self, today: date | None = None) -> analytics.ActivityMetrics:
        """Streak and note totals."""
        return analytics.activity_metrics(self._notes, today)

    def _check_new_id(self, note_id: str) -> None:
        if note_id in self._ids:
            raise DuplicateIdError(f"Note id {note_id} already exists", note_id=note_id)


__all__ = ["NoteStore"]
