from typing import Dict, Iterable, List

from tagnotes.domain.note import Note
from tagnotes.index.base import IndexStats, NoteIndex


class TagIndex(NoteIndex):
    """In-memory index over a set of notes.

    Holds the notes in the order they were supplied and a mapping from
    lowercased tag to the notes carrying it. Queries never touch storage and
    never fail.
    """

    def __init__(self) -> None:
        self._notes: List[Note] = []
        self._tag_index: Dict[str, List[Note]] = {}

    def rebuild(self, notes: Iterable[Note]) -> None:
        """Replace the entire index state with the given notes."""
        self._notes = []
        self._tag_index = {}
        for note in notes:
            self.add_note(note)

    def add_note(self, note: Note) -> None:
        """Append a note and file it under each of its tags."""
        self._notes.append(note)
        for tag in note.tags:
            self._tag_index.setdefault(tag.lower(), []).append(note)

    def remove_note(self, note_path: str) -> None:
        """Remove the first note with the given path, if indexed."""
        for position, note in enumerate(self._notes):
            if note.path == note_path:
                del self._notes[position]
                self._remove_from_tags(note)
                return

    def update_note(self, note: Note) -> None:
        """Replace the indexed copy of a note. The note moves to the end."""
        self.remove_note(note.path)
        self.add_note(note)

    def _remove_from_tags(self, note: Note) -> None:
        for tag in {tag.lower() for tag in note.tags}:
            bucket = self._tag_index.get(tag, [])
            remaining = [indexed for indexed in bucket if indexed.path != note.path]
            if remaining:
                self._tag_index[tag] = remaining
            else:
                self._tag_index.pop(tag, None)

    def search_by_tag(self, tag: str) -> List[Note]:
        """Get notes carrying a tag. Exact match after lowercasing, no prefixes."""
        return list(self._tag_index.get(tag.lower(), []))

    def search_by_content(self, query: str) -> List[Note]:
        """Linear scan for notes whose content or name contains the query.

        The empty query matches every note.
        """
        query_lower = query.lower()
        return [
            note
            for note in self._notes
            if query_lower in note.content.lower() or query_lower in note.name.lower()
        ]

    def all_notes(self) -> List[Note]:
        return list(self._notes)

    def all_tags(self) -> List[str]:
        return list(self._tag_index)

    def stats(self) -> IndexStats:
        return IndexStats(total_notes=len(self._notes), unique_tags=len(self._tag_index))
