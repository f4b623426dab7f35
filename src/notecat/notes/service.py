"""Note service for capturing and managing notes.

Ties the categorizer to the note collection: a note is only created once
its category is known, so a failed categorization leaves the collection
unchanged.
"""

import json
import logging
from pathlib import Path

from ..categorize.base import parse_provider
from ..categorize.dispatcher import CategoryDispatcher
from ..categorize.errors import ConfigurationError
from ..config.settings import ProviderCredentials, UserSettings
from .errors import DuplicateIdError
from .models import Author, Note
from .store import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """Service for capturing, ordering and deleting notes."""

    def __init__(
        self,
        dispatcher: CategoryDispatcher,
        settings: UserSettings,
        credentials: ProviderCredentials,
        author: Author,
        store: NoteStore | None = None,
    ) -> None:
        """Initialize note service.

        Args:
            dispatcher: Categorizer used for new notes
            settings: User settings (AI toggle, selected provider)
            credentials: API keys per provider
            author: Identity stamped on new notes
            store: Note collection, a new empty one if not given
        """
        self._dispatcher = dispatcher
        self._settings = settings
        self._credentials = credentials
        self._author = author
        self._store = store if store is not None else NoteStore()

    @property
    def store(self) -> NoteStore:
        """Get the note collection."""
        return self._store

    @property
    def dispatcher(self) -> CategoryDispatcher:
        """Get the categorizer used for new notes."""
        return self._dispatcher

    @property
    def author(self) -> Author:
        """Get the identity used for new notes."""
        return self._author

    @property
    def settings(self) -> UserSettings:
        """Get the user settings."""
        return self._settings

    @property
    def credentials(self) -> ProviderCredentials:
        """Get the provider API keys."""
        return self._credentials

    def credentials_for(self, provider: str) -> str:
        """Look up the API key for a provider selector."""
        selected = parse_provider(provider)
        key = selected.credential_key if selected is not None else provider
        return self._credentials.get(key)

    def capture(self, content: str) -> Note:
        """Categorize and store a new note.

        Args:
            content: Note text

        Returns:
            The stored note

        Raises:
            ValueError: If the content is blank.
            ConfigurationError: If AI categorization is disabled, the key is
                missing or the provider is unknown.
            EmptyResponseError: If the provider returned nothing usable.
            TransportError: If the provider call failed.
        """
        if not content.strip():
            raise ValueError("Note content must not be empty")

        provider = self._settings.selected_provider
        if not self._settings.ai_enabled:
            raise ConfigurationError(
                "AI categorization is disabled, enable it in settings first", provider=provider
            )

        category = self._dispatcher.categorize(content, provider, self.credentials_for(provider))

        note = Note.create(content=content, category=category, author=self._author)
        self._store.append(note)

        logger.info(f"Captured note {note.id}: category={category}, provider={provider}")
        return note

    def delete(self, note_id: str) -> Note:
        """Delete a note. Permission checks belong to the caller.

        Raises:
            NotFoundError: If no note has this id.
        """
        note = self._store.remove(note_id)
        logger.info(f"Deleted note {note_id}")
        return note

    def move(self, active_id: str, over_id: str | None) -> None:
        """Move a note onto the position of another."""
        self._store.move(active_id, over_id)

    def export_notes(self, path: Path) -> int:
        """Write all notes, in display order, to a JSON file.

        Returns:
            Number of notes written
        """
        notes = [note.to_dict() for note in self._store]
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(notes, f, indent=2)

        logger.info(f"Exported {len(notes)} notes to {path}")
        return len(notes)

    def import_notes(self, path: Path) -> int:
        """Load notes from a JSON export on top of the current ones.

        The exported display order is kept. Nothing is added if any id
        clashes.

        Returns:
            Number of notes imported

        Raises:
            DuplicateIdError: If an imported id is already present or repeated.
            ValueError: If the file is not a valid export.
        """
        with open(path) as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"{path} does not contain a list of notes")

        try:
            notes = [Note.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid note in {path}: {e}") from e

        seen: set[str] = set()
        for note in notes:
            if note.id in self._store or note.id in seen:
                raise DuplicateIdError(f"Note id {note.id} already exists", note_id=note.id)
            seen.add(note.id)

        # append() puts each note on top, so go bottom-up
        for note in reversed(notes):
            self._store.append(note)

        logger.info(f"Imported {len(notes)} notes from {path}")
        return len(notes)


__all__ = ["NoteService"]
