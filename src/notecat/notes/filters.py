"""Note filtering by search term, category, member and date.

All comparisons on dates happen at calendar-day granularity in local time.
"""

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from .models import Note

logger = logging.getLogger(__name__)

ALL = "all"


class DateRange(str, Enum):
    """Date windows a note can be filtered by."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class NoteFilter:
    """Criteria a note must meet to be shown.

    Attributes:
        search: Case-insensitive substring of content or category ("" = any)
        category: Exact category, or "all"
        member: Exact author name, or "all"
        date_range: Date window
    """

    search: str = ""
    category: str = ALL
    member: str = ALL
    date_range: DateRange = DateRange.ALL

    def __post_init__(self) -> None:
        # Accept plain strings such as "week"
        object.__setattr__(self, "date_range", DateRange(self.date_range))

    @property
    def is_empty(self) -> bool:
        """True if the filter lets every note through."""
        return (
            not self.search
            and self.category == ALL
            and self.member == ALL
            and self.date_range == DateRange.ALL
        )


def subtract_month(day: date) -> date:
    """Return the same day one calendar month earlier.

    The day is clamped to the length of the earlier month (Mar 31 -> Feb 28).
    """
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def window_start(date_range: DateRange, today: date) -> date | None:
    """First day included by a date range, or None for no lower bound."""
    if date_range == DateRange.TODAY:
        return today
    if date_range == DateRange.WEEK:
        return today - timedelta(days=7)
    if date_range == DateRange.MONTH:
        return subtract_month(today)
    return None


def matches_date(note: Note, date_range: DateRange, today: date | None = None) -> bool:
    """Check a note against a date range.

    A note whose timestamp cannot be parsed passes the filter.
    """
    if date_range == DateRange.ALL:
        return True

    today = today or date.today()
    try:
        note_day = note.local_date()
    except (TypeError, ValueError) as e:
        logger.warning(f"Error filtering note {note.id} by date ({note.timestamp!r}): {e}")
        return True

    if date_range == DateRange.TODAY:
        return note_day == today

    start = window_start(date_range, today)
    return start is None or note_day >= start


def matches(note: Note, note_filter: NoteFilter, today: date | None = None) -> bool:
    """Check a note against every criterion of a filter."""
    term = note_filter.search.lower()
    if term and term not in note.content.lower() and term not in note.category.lower():
        return False
    if note_filter.category != ALL and note.category != note_filter.category:
        return False
    if note_filter.member != ALL and note.author.name != note_filter.member:
        return False
    return matches_date(note, note_filter.date_range, today)


def filter_notes(
    notes: Iterable[Note],
    note_filter: NoteFilter | None = None,
    today: date | None = None,
) -> list[Note]:
    """Return the notes passing the filter, in display order.

    Args:
        notes: Notes in display order
        note_filter: Criteria to apply. None lets every note through.
        today: Reference day for date ranges. Defaults to today.

    Returns:
        Matching notes
    """
    if note_filter is None or note_filter.is_empty:
        return list(notes)

    today = today or date.today()
    return [note for note in notes if matches(note, note_filter, today)]


__all__ = [
    "ALL",
    "DateRange",
    "NoteFilter",
    "filter_notes",
    "matches",
    "matches_date",
    "subtract_month",
    "window_start",
]
