"""Application service tying note storage to the search index."""

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List

from loguru import logger as default_logger

from tagnotes.domain.note import Note
from tagnotes.index.base import IndexStats, NoteIndex
from tagnotes.index.tag_index import TagIndex
from tagnotes.note_store.base import NoteStore
from tagnotes.note_store.local import LocalNoteStore

if TYPE_CHECKING:
    from loguru import Logger


class SearchKind(str, Enum):
    TAG = "tag"
    CONTENT = "content"


class NotesApp:
    """Note and tag operations for front ends.

    Every operation that changes stored content or tags finishes with a full
    index rebuild from storage, so the index always reflects what is on disk.
    Notes returned by earlier calls are stale after a mutation.
    """

    def __init__(
        self,
        *,
        note_store: NoteStore,
        index: NoteIndex | None = None,
        logger: "Logger" = default_logger,
    ):
        """Initialize the application with its storage and index.

        Args:
            note_store: Durable note storage
            index: Search index, rebuilt from storage after every mutation
            logger: Logger for debug traces
        """
        self.note_store = note_store
        self.index = index if index is not None else TagIndex()
        self._logger = logger

    @classmethod
    def from_path(cls, root_path: str | Path, logger: "Logger" = default_logger) -> "NotesApp":
        """Create an application over a local notes directory."""
        return cls(note_store=LocalNoteStore(root_path, logger=logger), logger=logger)

    def initialize(self) -> None:
        """Ensure the notes directory exists and build the index."""
        self.note_store.initialize()
        self.refresh_index()

    def refresh_index(self) -> None:
        """Rebuild the index from a fresh enumeration of storage."""
        notes = self.note_store.get_all_notes()
        self.index.rebuild(notes)
        self._logger.debug(f"Index rebuilt with {len(notes)} notes")

    def create_note(self, name: str, content: str) -> None:
        self.note_store.create_note(name, content)
        self.refresh_index()

    def get_note(self, note_path: str) -> Note:
        return self.note_store.get_note(note_path)

    def search_notes(self, query: str, kind: str = SearchKind.CONTENT) -> List[Note]:
        """Search by tag or by content.

        Any kind other than "tag" searches content.
        """
        if kind == SearchKind.TAG:
            return self.index.search_by_tag(query)
        return self.index.search_by_content(query)

    def update_note_tags(self, note_path: str, tags: Iterable[str]) -> None:
        """Replace all tags of a note. Tags are stored exactly as given."""
        note = self.note_store.get_note(note_path)
        note.metadata.tags = list(tags)
        note.save()
        self.refresh_index()

    def add_tags_to_note(self, note_path: str, new_tags: Iterable[str]) -> None:
        """Add tags to a note without duplicates.

        New tags are trimmed and blanks dropped. Duplicates are detected with
        exact, case-sensitive comparison, so "Work" and "work" are both kept.
        Existing tags come first, followed by new tags in first-seen order.
        """
        note = self.note_store.get_note(note_path)

        tag_set = dict.fromkeys(note.tags)
        for tag in new_tags:
            tag = tag.strip()
            if tag:
                tag_set.setdefault(tag)

        note.metadata.tags = list(tag_set)
        note.save()
        self.refresh_index()

    def remove_tags_from_note(self, note_path: str, tags_to_remove: Iterable[str]) -> None:
        """Remove exact (trimmed) tag matches, keeping the order of the rest."""
        note = self.note_store.get_note(note_path)

        remove_set = {tag.strip() for tag in tags_to_remove}
        note.metadata.tags = [tag for tag in note.tags if tag not in remove_set]
        note.save()
        self.refresh_index()

    def update_note_content(self, note_path: str, content: str) -> None:
        """Overwrite a note's content. Tags are untouched."""
        note = self.note_store.get_note(note_path)
        note.content = content
        note.save()
        self.refresh_index()

    def delete_note(self, note_path: str) -> None:
        """Remove a note and its metadata.

        Raises:
            NoteNotFoundError: The note does not exist
        """
        note = self.note_store.get_note(note_path)
        note.delete()
        self.refresh_index()

    def list_all_notes(self) -> List[Note]:
        return self.index.all_notes()

    def get_all_tags(self) -> List[str]:
        return self.index.all_tags()

    def get_stats(self) -> IndexStats:
        return self.index.stats()
