"""Unit tests for note filtering."""

import logging
from datetime import date, timedelta

import pytest

from notecat.notes import Author, Note, NoteStore
from notecat.notes.filters import (
    DateRange,
    NoteFilter,
    filter_notes,
    matches_date,
    subtract_month,
    window_start,
)

TODAY = date(2024, 3, 15)
ALICE = Author(name="Alice")
BOB = Author(name="Bob")


def make_note(
    note_id: str,
    content: str,
    category: str,
    author: Author = ALICE,
    day: date = TODAY,
) -> Note:
    return Note(
        id=note_id,
        content=content,
        category=category,
        timestamp=f"{day.isoformat()}T12:00:00",
        author=author,
    )


@pytest.fixture
def notes() -> list[Note]:
    """Two notes: a Work note today and an Ideas note ten days ago."""
    return [
        make_note("a", "Finish the quarterly report", "Work", ALICE, TODAY),
        make_note("b", "App for tracking plants", "Ideas", BOB, TODAY - timedelta(days=10)),
    ]


def filtered_ids(notes: list[Note], note_filter: NoteFilter, today: date = TODAY) -> list[str]:
    return [note.id for note in filter_notes(notes, note_filter, today)]


class TestNoteFilter:
    """Test filter construction."""

    def test_default_is_empty(self) -> None:
        """Test the default filter lets everything through."""
        assert NoteFilter().is_empty

    def test_date_range_from_string(self) -> None:
        """Test plain strings are coerced to DateRange."""
        assert NoteFilter(date_range="week").date_range == DateRange.WEEK

    def test_invalid_date_range(self) -> None:
        """Test unknown ranges are rejected."""
        with pytest.raises(ValueError):
            NoteFilter(date_range="year")


class TestFilterNotes:
    """Test combined filtering."""

    def test_no_filter_returns_all(self, notes: list[Note]) -> None:
        """Test None and the empty filter keep every note in order."""
        assert [note.id for note in filter_notes(notes)] == ["a", "b"]
        assert filtered_ids(notes, NoteFilter()) == ["a", "b"]

    def test_week_window(self, notes: list[Note]) -> None:
        """Test the week range drops older notes."""
        assert filtered_ids(notes, NoteFilter(date_range=DateRange.WEEK)) == ["a"]

    def test_category(self, notes: list[Note]) -> None:
        """Test exact category match."""
        assert filtered_ids(notes, NoteFilter(category="Ideas")) == ["b"]

    def test_category_is_exact(self, notes: list[Note]) -> None:
        """Test category does not match case-insensitively."""
        assert filtered_ids(notes, NoteFilter(category="ideas")) == []

    def test_search_matches_category(self, notes: list[Note]) -> None:
        """Test the search term also looks at the category."""
        assert filtered_ids(notes, NoteFilter(search="work")) == ["a"]

    def test_search_matches_content_case_insensitive(self, notes: list[Note]) -> None:
        """Test the search term matches content regardless of case."""
        assert filtered_ids(notes, NoteFilter(search="PLANTS")) == ["b"]

    def test_member(self, notes: list[Note]) -> None:
        """Test filtering by author name."""
        assert filtered_ids(notes, NoteFilter(member="Bob")) == ["b"]
        assert filtered_ids(notes, NoteFilter(member="Carol")) == []

    def test_criteria_combine(self, notes: list[Note]) -> None:
        """Test every criterion must hold."""
        note_filter = NoteFilter(search="app", category="Ideas", date_range=DateRange.WEEK)
        assert filtered_ids(notes, note_filter) == []

    def test_order_is_preserved(self) -> None:
        """Test results keep the display order."""
        notes = [make_note(str(i), f"task {i}", "Tasks") for i in range(5)]
        assert filtered_ids(notes, NoteFilter(search="task")) == ["0", "1", "2", "3", "4"]


class TestDateRanges:
    """Test the date windows."""

    def test_today(self) -> None:
        """Test only notes from the reference day match."""
        today_note = make_note("a", "x", "Work", day=TODAY)
        yesterday = make_note("b", "x", "Work", day=TODAY - timedelta(days=1))
        assert filtered_ids([today_note, yesterday], NoteFilter(date_range="today")) == ["a"]

    def test_week_boundary(self) -> None:
        """Test the week starts seven days before today."""
        inside = make_note("a", "x", "Work", day=TODAY - timedelta(days=7))
        outside = make_note("b", "x", "Work", day=TODAY - timedelta(days=8))
        assert filtered_ids([inside, outside], NoteFilter(date_range="week")) == ["a"]

    def test_month_boundary(self) -> None:
        """Test the month starts on the same day last month."""
        inside = make_note("a", "x", "Work", day=date(2024, 2, 15))
        outside = make_note("b", "x", "Work", day=date(2024, 2, 14))
        assert filtered_ids([inside, outside], NoteFilter(date_range="month")) == ["a"]

    def test_timezone_aware_timestamp(self) -> None:
        """Test aware timestamps are compared by their local day."""
        note = Note(
            id="a",
            content="x",
            category="Work",
            timestamp="2024-03-15T12:00:00+00:00",
            author=ALICE,
        )
        assert matches_date(note, DateRange.ALL, TODAY)
        assert note.local_date() in {TODAY - timedelta(days=1), TODAY, TODAY + timedelta(days=1)}

    def test_malformed_timestamp_passes(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test notes with unreadable timestamps are kept and logged."""
        broken = Note(id="x", content="x", category="Work", timestamp="yesterday", author=ALICE)

        with caplog.at_level(logging.WARNING):
            assert filtered_ids([broken], NoteFilter(date_range="today")) == ["x"]

        assert "Error filtering note x by date" in caplog.text

    @pytest.mark.parametrize(
        "timestamp", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00"]
    )
    @pytest.mark.parametrize("date_range", ["today", "week", "month"])
    def test_out_of_range_timestamp_passes(self, timestamp: str, date_range: str) -> None:
        """Test offsets that push the local day past the calendar's limits are kept."""
        edge = Note(id="x", content="x", category="Work", timestamp=timestamp, author=ALICE)
        store = NoteStore([edge])

        assert [note.id for note in store.filter(NoteFilter(date_range=date_range), TODAY)] == ["x"]


class TestMonthArithmetic:
    """Test calendar month subtraction."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2024, 3, 15), date(2024, 2, 15)),
            (date(2024, 3, 31), date(2024, 2, 29)),
            (date(2023, 3, 31), date(2023, 2, 28)),
            (date(2024, 1, 10), date(2023, 12, 10)),
            (date(2024, 5, 31), date(2024, 4, 30)),
        ],
    )
    def test_subtract_month(self, day: date, expected: date) -> None:
        """Test the day is kept or clamped to the shorter month."""
        assert subtract_month(day) == expected

    def test_window_start(self) -> None:
        """Test the lower bound of each range."""
        assert window_start(DateRange.TODAY, TODAY) == TODAY
        assert window_start(DateRange.WEEK, TODAY) == date(2024, 3, 8)
        assert window_start(DateRange.MONTH, TODAY) == date(2024, 2, 15)
        assert window_start(DateRange.ALL, TODAY) is None
