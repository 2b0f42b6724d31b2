from pathlib import Path
from typing import TYPE_CHECKING, List

from loguru import logger as default_logger

from tagnotes.domain.note import NOTE_SUFFIX, Note
from tagnotes.exceptions import (
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NotesError,
    StorageError,
)
from tagnotes.note_store.base import NoteStore

if TYPE_CHECKING:
    from loguru import Logger


class LocalNoteStore(NoteStore):
    """Note store backed by a directory tree of ``.note``/``.meta`` file pairs."""

    def __init__(self, root_path: str | Path, logger: "Logger" = default_logger) -> None:
        """Initialize LocalNoteStore.

        Args:
            root_path: Directory holding the notes. Subdirectories are allowed.
            logger: Logger for debug traces and skipped-note warnings.
        """
        self._root_path = Path(root_path)
        self._logger = logger

    @property
    def root_path(self) -> Path:
        return self._root_path

    def initialize(self) -> None:
        """Create the root directory if it doesn't exist."""
        try:
            self._root_path.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise StorageError(
                "failed to create notes directory",
                operation="initialize",
                path=str(self._root_path),
                original_error=err,
            ) from err

    def resolve_path(self, name: str) -> str:
        """Resolve a note name to its content path.

        Names already rooted at the store root are used as given, anything else
        is joined under the root. The note suffix is appended when missing.

        Raises:
            InvalidNoteNameError: The resolved path lies outside the root
        """
        if str(name).startswith(str(self._root_path)):
            full_path = str(name)
        else:
            full_path = str(self._root_path / name)

        if not full_path.endswith(NOTE_SUFFIX):
            full_path += NOTE_SUFFIX

        if not Path(full_path).resolve().is_relative_to(self._root_path.resolve()):
            raise InvalidNoteNameError(str(name), str(self._root_path))
        return full_path

    def get_all_notes(self) -> List[Note]:
        """Load every note under the root, depth-first in lexical order.

        A note that fails to load is logged and skipped so that one corrupt
        note does not hide the rest.
        """
        self._logger.debug(f"Getting all notes from directory: {self._root_path}")
        if not self._root_path.is_dir():
            raise StorageError(
                "failed to walk directory",
                operation="walk",
                path=str(self._root_path),
                original_error=FileNotFoundError(f"not a directory: {self._root_path}"),
            )

        try:
            note_files = sorted(
                path for path in self._root_path.rglob(f"*{NOTE_SUFFIX}") if path.is_file()
            )
        except OSError as err:
            self._logger.debug(f"Error getting all notes: {err}")
            raise StorageError(
                "failed to walk directory",
                operation="walk",
                path=str(self._root_path),
                original_error=err,
            ) from err

        notes = []
        for note_file in note_files:
            try:
                notes.append(Note.load(note_file))
            except NotesError as err:
                self._logger.warning(f"Failed to load note {note_file}: {err}")

        self._logger.debug(f"Successfully retrieved {len(notes)} notes")
        return notes

    def get_note(self, name: str) -> Note:
        """Load a note by name.

        Raises:
            NoteNotFoundError: No note exists at the resolved path
        """
        self._logger.debug(f"Getting note: {name}")
        try:
            note = Note.load(self.resolve_path(name))
        except NotesError as err:
            self._logger.debug(f"Error getting note {name}: {err}")
            raise

        self._logger.debug(f"Successfully retrieved note: {name}")
        return note

    def create_note(self, name: str, content: str) -> Note:
        """Create a note with the given content and no tags.

        Raises:
            NoteAlreadyExistsError: The resolved path is already occupied
        """
        self._logger.debug(f"Creating new note: {name}")
        full_path = self.resolve_path(name)

        if Path(full_path).exists():
            self._logger.debug(f"Note already exists: {name}")
            raise NoteAlreadyExistsError(name)

        note = Note.new(full_path)
        note.content = content
        try:
            note.save()
        except StorageError as err:
            self._logger.debug(f"Error creating note {name}: {err}")
            raise

        self._logger.debug(f"Successfully created note: {name}")
        return note
