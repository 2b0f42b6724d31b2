from typing import Iterable, List, Protocol

from pydantic import BaseModel

from tagnotes.domain.note import Note


class IndexStats(BaseModel):
    """Counts reported by the ``stats`` command."""

    total_notes: int
    unique_tags: int


class NoteIndex(Protocol):
    def rebuild(self, notes: Iterable[Note]) -> None:
        """Replace the whole index with the given notes."""
        ...

    def search_by_tag(self, tag: str) -> List[Note]:
        """Get notes carrying a tag, compared case-insensitively."""
        ...

    def search_by_content(self, query: str) -> List[Note]:
        """Get notes whose content or name contains the query, ignoring case."""
        ...

    def all_notes(self) -> List[Note]:
        """Get all indexed notes in rebuild order."""
        ...

    def all_tags(self) -> List[str]:
        """Get the distinct lowercased tags."""
        ...

    def stats(self) -> IndexStats:
        """Get note and tag counts."""
        ...
