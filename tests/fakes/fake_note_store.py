from pathlib import Path
from typing import Dict, List

from tagnotes.domain.note import NOTE_SUFFIX, Note
from tagnotes.exceptions import NoteAlreadyExistsError, NoteNotFoundError, StorageError
from tagnotes.note_store.base import NoteStore


class FakeNoteStore(NoteStore):
    """In-memory note store that never touches the filesystem."""

    def __init__(self, notes: List[Note] | None = None) -> None:
        self._notes: Dict[str, Note] = {note.path: note for note in notes or []}
        self.enumerations = 0
        self.fail_enumeration = False

    @property
    def root_path(self) -> Path:
        return Path("/fake")

    def initialize(self) -> None:
        pass

    def resolve_path(self, name: str) -> str:
        path = name if name.startswith("/fake") else f"/fake/{name}"
        return path if path.endswith(NOTE_SUFFIX) else path + NOTE_SUFFIX

    def get_all_notes(self) -> List[Note]:
        self.enumerations += 1
        if self.fail_enumeration:
            raise StorageError("failed to walk directory", operation="walk", path="/fake")
        return [note.model_copy(deep=True) for note in self._notes.values()]

    def get_note(self, name: str) -> Note:
        path = self.resolve_path(name)
        if path not in self._notes:
            raise NoteNotFoundError(path)
        return self._notes[path].model_copy(deep=True)

    def create_note(self, name: str, content: str) -> Note:
        path = self.resolve_path(name)
        if path in self._notes:
            raise NoteAlreadyExistsError(name)
        note = Note.new(path)
        note.content = content
        self._notes[path] = note
        return note
