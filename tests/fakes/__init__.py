from tests.fakes.fake_note_store import FakeNoteStore

__all__ = ["FakeNoteStore"]
