from loguru import logger

from tagnotes.api import create_app
from tagnotes.config import configure_logging, settings
from tagnotes.notes_app import NotesApp

configure_logging(settings)

logger.info(f"Serving notes from {settings.notes_path}")
notes_app = NotesApp.from_path(settings.notes_path)
notes_app.initialize()
app = create_app(notes_app=notes_app)
