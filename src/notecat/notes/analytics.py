"""Activity analytics over a note collection.

Per-day trend counts, category distribution, team leaderboard and the
daily writing streak. Every function here is a pure view of the notes
it is given and never raises for odd data: notes with unreadable
timestamps are skipped by the day-based views.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from .models import Note

logger = logging.getLogger(__name__)

# Supported trend windows in days (week, month)
TREND_WINDOWS = (7, 30)

# Streak length the user is nudged towards
STREAK_GOAL = 7

LEADERBOARD_SIZE = 5


@dataclass
class ActivityMetrics:
    """Headline activity numbers.

    Attributes:
        streak: Consecutive days with notes, ending today
        total_notes: Notes in the collection
        today_notes: Notes created today
        remaining_days: Days left to reach the streak goal
    """

    streak: int
    total_notes: int
    today_notes: int
    remaining_days: int

    @property
    def goal_reached(self) -> bool:
        return self.remaining_days == 0


def note_days(notes: Iterable[Note]) -> list[date]:
    """Local creation day of every note with a readable timestamp."""
    days: list[date] = []
    for note in notes:
        try:
            days.append(note.local_date())
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping note {note.id} with bad timestamp {note.timestamp!r}: {e}")
    return days


def daily_counts(
    notes: Iterable[Note],
    days: int = 7,
    today: date | None = None,
) -> dict[date, int]:
    """Count notes per calendar day over a trailing window.

    Every day of the window is present, oldest first, even with no notes.

    Args:
        notes: Notes to count
        days: Window length, 7 or 30, including today
        today: Last day of the window. Defaults to today.

    Returns:
        Mapping of day to note count

    Raises:
        ValueError: If the window length is not supported.
    """
    if days not in TREND_WINDOWS:
        raise ValueError(f"Unsupported window of {days} days, expected one of {TREND_WINDOWS}")

    today = today or date.today()
    counts = {today - timedelta(days=offset): 0 for offset in range(days - 1, -1, -1)}

    for day in note_days(notes):
        if day in counts:
            counts[day] += 1

    return counts


def category_distribution(notes: Iterable[Note]) -> dict[str, int]:
    """Count notes per category."""
    return dict(Counter(note.category for note in notes))


def leaderboard(notes: Iterable[Note], limit: int = LEADERBOARD_SIZE) -> list[tuple[str, int]]:
    """Rank authors by number of notes.

    Ties keep the order in which authors were first seen.

    Args:
        notes: Notes in display order
        limit: Number of entries to return

    Returns:
        (author name, note count) pairs, highest count first
    """
    totals: dict[str, int] = {}
    for note in notes:
        totals[note.author.name] = totals.get(note.author.name, 0) + 1

    # sorted() is stable, so equal counts stay in first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def streak(notes: Iterable[Note], today: date | None = None) -> int:
    """Count consecutive days with at least one note, ending today.

    No note today means no streak, whatever happened before.

    Args:
        notes: Notes to inspect
        today: Reference day. Defaults to today.

    Returns:
        Streak length in days, today included
    """
    today = today or date.today()
    active_days = set(note_days(notes))

    current = 0
    day = today
    while day in active_days:
        current += 1
        day -= timedelta(days=1)

    return current


def activity_metrics(notes: Iterable[Note], today: date | None = None) -> ActivityMetrics:
    """Compute the streak together with note totals."""
    today = today or date.today()
    notes = list(notes)
    current = streak(notes, today)

    return ActivityMetrics(
        streak=current,
        total_notes=len(notes),
        today_notes=sum(1 for day in note_days(notes) if day == today),
        remaining_days=max(0, STREAK_GOAL - current),
    )


__all__ = [
    "ActivityMetrics",
    "LEADERBOARD_SIZE",
    "STREAK_GOAL",
    "TREND_WINDOWS",
    "activity_metrics",
    "category_distribution",
    "daily_counts",
    "leaderboard",
    "note_days",
    "streak",
]
