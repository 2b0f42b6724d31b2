"""Exception hierarchy for note storage and indexing.

Every failure raised by the note entity and the note store derives from
NotesError, so front ends can report domain errors and stay interactive.
"""

from typing import Any, Dict, Optional


class NotesError(Exception):
    """Base exception for all note errors.

    Attributes:
        message: Human-readable error message
        details: Additional context about the error
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class NoteNotFoundError(NotesError):
    """Raised when a note's content file does not exist."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"note file does not exist: {path}", details={"path": path})
        self.path = path


class NoteAlreadyExistsError(NotesError):
    """Raised when creating a note whose path is already occupied."""

    def __init__(self, path: str):
        super().__init__(f"note already exists: {path}", details={"path": path})
        self.path = path


class StorageError(NotesError):
    """Raised when reading, writing, deleting or walking note files fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if path:
            details["path"] = path
        if original_error:
            details["original_error"] = str(original_error)[:200]

        super().__init__(
            f"{message}: {original_error}" if original_error else message, details=details
        )
        self.operation = operation
        self.path = path
        self.original_error = original_error


class MetadataParseError(NotesError):
    """Raised when a metadata sidecar is not a valid tag document."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        details: Dict[str, Any] = {"path": path}
        if original_error:
            details["original_error"] = str(original_error)[:200]

        super().__init__(f"failed to parse metadata {path}", details=details)
        self.path = path
        self.original_error = original_error


class InvalidNoteNameError(NotesError):
    """Raised when a note name resolves to a path outside the notes root."""

    def __init__(self, name: str, root_path: str):
        super().__init__(
            f"note name escapes the notes directory: {name}",
            details={"name": name, "root_path": root_path},
        )
        self.name = name
