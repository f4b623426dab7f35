"""Error types for the note collection."""


class NoteStoreError(Exception):
    """Base exception for note collection errors."""

    def __init__(self, message: str, note_id: str | None = None) -> None:
        super().__init__(message)
        self.note_id = note_id


class NotFoundError(NoteStoreError):
    """Raised when no note has the requested id."""

    pass


class DuplicateIdError(NoteStoreError):
    """Raised when a note id is already in the collection."""

    pass


__all__ = [
    "DuplicateIdError",
    "NoteStoreError",
    "NotFoundError",
]
