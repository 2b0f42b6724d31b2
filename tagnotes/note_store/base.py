from pathlib import Path
from typing import List, Protocol

from tagnotes.domain.note import Note


class NoteStore(Protocol):
    """Protocol for note storage implementations."""

    @property
    def root_path(self) -> Path:
        """Root location all note names are resolved against."""
        ...

    def initialize(self) -> None:
        """Ensure the root location exists."""
        ...

    def resolve_path(self, name: str) -> str:
        """Resolve a logical note name to the full content path."""
        ...

    def get_all_notes(self) -> List[Note]:
        """Load every note under the root, skipping notes that fail to load."""
        ...

    def get_note(self, name: str) -> Note:
        """Load a note by name or path."""
        ...

    def create_note(self, name: str, content: str) -> Note:
        """Create and persist a new note with no tags."""
        ...
