"""Data models for notes.

Defines the Note entity and the Author stamped on it.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any


@dataclass(frozen=True)
class Author:
    """Identity of the user who created a note."""

    name: str
    avatar: str = ""


@dataclass(frozen=True)
class Note:
    """A categorized note.

    Notes never change after creation; only their position in the
    collection does.

    Attributes:
        id: Unique identifier, stable for the note's lifetime
        content: Note text as entered by the user
        category: Label from the categorizer or a placeholder
        timestamp: Creation instant, ISO-8601
        author: Creating user
    """

    id: str
    content: str
    category: str
    timestamp: str
    author: Author

    @classmethod
    def create(
        cls,
        content: str,
        category: str,
        author: Author,
        now: datetime | None = None,
    ) -> "Note":
        """Create a new note with a fresh id and the current time."""
        now = now or datetime.now(UTC)
        return cls(
            id=uuid.uuid4().hex,
            content=content,
            category=category,
            timestamp=now.isoformat(),
            author=author,
        )

    def created_at(self) -> datetime:
        """Parse the creation timestamp.

        Raises:
            ValueError: If the timestamp is not valid ISO-8601.
        """
        return datetime.fromisoformat(self.timestamp)

    def local_date(self) -> date:
        """Calendar day the note was created on, in local time.

        Timestamps without an offset are taken to be local already.

        Raises:
            ValueError: If the timestamp is not valid ISO-8601 or its local
                day falls outside the supported date range.
        """
        created = self.created_at()
        if created.tzinfo is not None:
            try:
                created = created.astimezone()
            except OverflowError as e:
                raise ValueError(f"Timestamp {self.timestamp!r} is out of range: {e}") from e
        return created.date()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "id": self.id,
            "content": self.content,
            "category": self.category,
            "timestamp": self.timestamp,
            "author": {"name": self.author.name, "avatar": self.author.avatar},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        """Create from an exported dictionary.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has the wrong type.
        """
        for key in ("id", "content", "category", "timestamp"):
            if not isinstance(data[key], str):
                raise ValueError(f"Field '{key}' must be a string, got {type(data[key]).__name__}")

        author = data.get("author") or {}
        if not isinstance(author, dict):
            raise ValueError(f"Field 'author' must be an object, got {type(author).__name__}")
        name = author.get("name", "")
        avatar = author.get("avatar", "")
        if not isinstance(name, str) or not isinstance(avatar, str):
            raise ValueError("Author name and avatar must be strings")

        return cls(
            id=data["id"],
            content=data["content"],
            category=data["category"],
            timestamp=data["timestamp"],
            author=Author(name=name, avatar=avatar),
        )


__all__ = ["Author", "Note"]
