import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from tagnotes.api import create_app
from tagnotes.domain.note import Note, NoteMetadata
from tagnotes.note_store.local import LocalNoteStore
from tagnotes.notes_app import NotesApp


@pytest.fixture
def test_notes() -> List[Note]:
    return [
        Note(
            path="/test/shopping.note",
            name="shopping",
            content="milk, eggs",
            metadata=NoteMetadata(tags=["Errands", "home"]),
        ),
        Note(
            path="/test/work/standup.note",
            name="standup",
            content="Discuss the release plan",
            metadata=NoteMetadata(tags=["work", "Meetings"]),
        ),
        Note(
            path="/test/ideas.note",
            name="ideas",
            content="A garden for the HOME office",
        ),
    ]


@pytest.fixture
def temp_notes_base() -> Generator[Path, None, None]:
    """Create a temporary directory for note storage tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def notes_directory(temp_notes_base: Path) -> Path:
    """Create notes subdirectory."""
    notes_dir = temp_notes_base / "notes"
    notes_dir.mkdir()
    return notes_dir


@pytest.fixture
def note_store(notes_directory: Path) -> LocalNoteStore:
    return LocalNoteStore(notes_directory)


@pytest.fixture
def notes_app(note_store: LocalNoteStore) -> NotesApp:
    """Initialized application over an empty notes directory."""
    app = NotesApp(note_store=note_store)
    app.initialize()
    return app


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Collect warning and error log messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override settings for testing."""
    monkeypatch.setattr("tagnotes.config.settings.auth_username", "admin")
    monkeypatch.setattr("tagnotes.config.settings.auth_password", "password")


@pytest.fixture
def test_client(notes_app: NotesApp) -> TestClient:
    """Create test client authenticated with the test credentials."""
    client = TestClient(create_app(notes_app=notes_app))
    client.auth = ("admin", "password")
    return client
