"""Note domain models and their persistence.

A note is two sibling files sharing a base path: the content file
(``<base>.note``) and a JSON metadata sidecar (``<base>.meta``) holding its
tags. Content and tags are written independently so either can be rewritten
without touching the other.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from tagnotes.exceptions import MetadataParseError, NoteNotFoundError, StorageError

NOTE_SUFFIX = ".note"
META_SUFFIX = ".meta"


def meta_path_for(note_path: str) -> str:
    """Return the metadata sidecar path for a note content path."""
    return note_path.removesuffix(NOTE_SUFFIX) + META_SUFFIX


class NoteMetadata(BaseModel):
    """Persisted form of a note's tags.

    Attributes:
        tags: Ordered, case-preserved tag strings. Deduplication and trimming
            are enforced by callers, not by the format.
    """

    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @classmethod
    def load(cls, meta_path: str | Path) -> "NoteMetadata":
        """Load metadata from a sidecar file.

        A missing sidecar is not an error: a note may not have one yet.

        Raises:
            StorageError: The sidecar exists but cannot be read
            MetadataParseError: The sidecar is not a valid tag document
        """
        meta_path = Path(meta_path)
        try:
            data = meta_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        except (OSError, UnicodeDecodeError) as err:
            raise StorageError(
                "failed to read metadata file",
                operation="read_metadata",
                path=str(meta_path),
                original_error=err,
            ) from err

        try:
            return cls.model_validate_json(data)
        except ValidationError as err:
            raise MetadataParseError(str(meta_path), original_error=err) from err

    def save(self, meta_path: str | Path) -> None:
        """Write the full tag document to the sidecar, creating parent directories."""
        meta_path = Path(meta_path)
        try:
            meta_path.parent.mkdir(parents=True, exist_ok=True)
            meta_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        except OSError as err:
            raise StorageError(
                "failed to write metadata file",
                operation="write_metadata",
                path=str(meta_path),
                original_error=err,
            ) from err


class Note(BaseModel):
    """A single note with its content and tag metadata.

    Notes are snapshots: after any mutation through the application they are
    stale and should be fetched again.

    Attributes:
        path: Full path of the content file
        name: File name without the note suffix
        content: Note text
        metadata: Tag metadata loaded from the sidecar
        modified: Content file modification timestamp (seconds since epoch)
    """

    path: str
    name: str
    content: str = ""
    metadata: NoteMetadata = Field(default_factory=NoteMetadata)
    modified: float = 0.0

    @property
    def tags(self) -> list[str]:
        return self.metadata.tags

    @property
    def meta_path(self) -> str:
        return meta_path_for(self.path)

    @classmethod
    def new(cls, path: str | Path) -> "Note":
        """Create an unsaved note with empty content and no tags."""
        path = str(path)
        return cls(path=path, name=Path(path).name.removesuffix(NOTE_SUFFIX))

    @classmethod
    def load(cls, path: str | Path) -> "Note":
        """Load a note and its tags from disk.

        Raises:
            NoteNotFoundError: The content file does not exist
            StorageError: The content file cannot be read
            MetadataParseError: The sidecar is malformed
        """
        note_path = Path(path)
        if not note_path.is_file():
            raise NoteNotFoundError(str(note_path))

        note = cls.new(note_path)
        try:
            note.content = note_path.read_text(encoding="utf-8")
            note.modified = note_path.stat().st_mtime
        except (OSError, UnicodeDecodeError) as err:
            raise StorageError(
                "failed to read note content",
                operation="read_content",
                path=note.path,
                original_error=err,
            ) from err

        note.metadata = NoteMetadata.load(note.meta_path)
        return note

    def save(self) -> None:
        """Write content and metadata as two independent writes.

        If the metadata write fails the content write has already happened;
        there is no rollback.
        """
        note_path = Path(self.path)
        try:
            note_path.parent.mkdir(parents=True, exist_ok=True)
            note_path.write_text(self.content, encoding="utf-8")
            modified = note_path.stat().st_mtime
        except OSError as err:
            raise StorageError(
                "failed to save note content",
                operation="write_content",
                path=self.path,
                original_error=err,
            ) from err

        self.metadata.save(self.meta_path)
        self.modified = modified

    def delete(self) -> None:
        """Remove the content file and the sidecar. Missing files are ignored."""
        for operation, file_path in (
            ("delete_content", self.path),
            ("delete_metadata", self.meta_path),
        ):
            try:
                Path(file_path).unlink(missing_ok=True)
            except OSError as err:
                raise StorageError(
                    f"failed to {operation.replace('_', ' ')} file",
                    operation=operation,
                    path=file_path,
                    original_error=err,
                ) from err
