"""Tests for NotesApp: storage mutations followed by index rebuilds."""

from pathlib import Path

import pytest

from tagnotes.domain.note import Note
from tagnotes.exceptions import NoteAlreadyExistsError, NoteNotFoundError, StorageError
from tagnotes.notes_app import NotesApp, SearchKind
from tests.fakes import FakeNoteStore


def test_initialize_indexes_existing_notes(notes_directory: Path) -> None:
    (notes_directory / "old.note").write_text("already here")

    app = NotesApp.from_path(notes_directory)
    app.initialize()

    assert [note.name for note in app.list_all_notes()] == ["old"]


def test_initialize_creates_missing_root(temp_notes_base: Path) -> None:
    app = NotesApp.from_path(temp_notes_base / "fresh")
    app.initialize()

    assert (temp_notes_base / "fresh").is_dir()
    assert app.list_all_notes() == []


def test_content_search_scenario(notes_app: NotesApp) -> None:
    notes_app.create_note("shopping", "milk, eggs")

    assert [note.name for note in notes_app.search_notes("milk", "content")] == ["shopping"]
    assert [note.name for note in notes_app.search_notes("MILK", "content")] == ["shopping"]
    assert notes_app.search_notes("bread", "content") == []


def test_unknown_search_kind_falls_back_to_content(notes_app: NotesApp) -> None:
    notes_app.create_note("shopping", "milk, eggs")

    assert [note.name for note in notes_app.search_notes("milk", "fuzzy")] == ["shopping"]


def test_create_duplicate_note_raises(notes_app: NotesApp) -> None:
    notes_app.create_note("shopping", "milk")

    with pytest.raises(NoteAlreadyExistsError):
        notes_app.create_note("shopping", "again")


def test_add_tags_is_idempotent(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")

    notes_app.add_tags_to_note("a", ["work"])
    notes_app.add_tags_to_note("a", ["work", " work "])

    assert notes_app.get_note("a").tags == ["work"]


def test_add_tags_keeps_each_spelling(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")

    notes_app.add_tags_to_note("a", ["Work", "work"])

    assert sorted(notes_app.get_note("a").tags) == ["Work", "work"]
    assert len(notes_app.search_notes("WORK", SearchKind.TAG)) == 2, (
        "Both spellings share one lowercase bucket"
    )


def test_add_tags_trims_and_drops_blanks(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.update_note_tags("a", ["existing"])

    notes_app.add_tags_to_note("a", ["  new ", "", "   ", "existing"])

    assert notes_app.get_note("a").tags == ["existing", "new"]


def test_update_note_tags_replaces_verbatim(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.add_tags_to_note("a", ["old"])

    notes_app.update_note_tags("a", [" raw ", "raw", ""])

    assert notes_app.get_note("a").tags == [" raw ", "raw", ""]
    assert notes_app.search_notes("old", SearchKind.TAG) == []


def test_remove_then_add_restores_membership(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.add_tags_to_note("a", ["one", "two", "three"])

    notes_app.remove_tags_from_note("a", [" two "])
    assert notes_app.get_note("a").tags == ["one", "three"]
    assert notes_app.search_notes("two", SearchKind.TAG) == []

    notes_app.add_tags_to_note("a", ["two"])
    assert [note.name for note in notes_app.search_notes("two", SearchKind.TAG)] == ["a"]


def test_remove_absent_tag_is_noop(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.add_tags_to_note("a", ["keep"])

    notes_app.remove_tags_from_note("a", ["missing"])

    assert notes_app.get_note("a").tags == ["keep"]


def test_tag_operations_on_missing_note_raise(notes_app: NotesApp) -> None:
    with pytest.raises(NoteNotFoundError):
        notes_app.add_tags_to_note("ghost", ["x"])
    with pytest.raises(NoteNotFoundError):
        notes_app.remove_tags_from_note("ghost", ["x"])
    with pytest.raises(NoteNotFoundError):
        notes_app.update_note_tags("ghost", ["x"])


def test_update_content_keeps_tags(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "before")
    notes_app.add_tags_to_note("a", ["kept"])

    notes_app.update_note_content("a", "after")

    note = notes_app.get_note("a")
    assert note.content == "after"
    assert note.tags == ["kept"]
    assert notes_app.search_notes("before") == []
    assert [n.name for n in notes_app.search_notes("after")] == ["a"]


def test_delete_then_get_raises_not_found(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.add_tags_to_note("a", ["doomed"])

    notes_app.delete_note("a")

    with pytest.raises(NoteNotFoundError):
        notes_app.get_note("a")
    assert notes_app.list_all_notes() == []
    assert notes_app.get_all_tags() == []


def test_delete_missing_note_raises(notes_app: NotesApp) -> None:
    with pytest.raises(NoteNotFoundError):
        notes_app.delete_note("ghost")


def test_snapshots_go_stale_after_mutation(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "one")
    snapshot = notes_app.list_all_notes()[0]

    notes_app.update_note_content("a", "two")

    assert snapshot.content == "one"
    assert notes_app.list_all_notes()[0].content == "two"


def test_refresh_picks_up_external_changes(notes_app: NotesApp, notes_directory: Path) -> None:
    (notes_directory / "external.note").write_text("written by another tool")
    assert notes_app.list_all_notes() == []

    notes_app.refresh_index()

    assert [note.name for note in notes_app.list_all_notes()] == ["external"]


def test_stats_and_tags(notes_app: NotesApp) -> None:
    notes_app.create_note("a", "")
    notes_app.create_note("b", "")
    notes_app.add_tags_to_note("a", ["Work", "home"])
    notes_app.add_tags_to_note("b", ["work"])

    stats = notes_app.get_stats()

    assert stats.total_notes == 2
    assert stats.unique_tags == 2
    assert sorted(notes_app.get_all_tags()) == ["home", "work"]


def test_every_mutation_rebuilds_from_storage() -> None:
    store = FakeNoteStore()
    app = NotesApp(note_store=store)
    app.initialize()
    assert store.enumerations == 1

    app.create_note("fresh", "from the fake")

    assert store.enumerations == 2
    assert [note.name for note in app.search_notes("fake")] == ["fresh"]


def test_enumeration_failure_propagates() -> None:
    store = FakeNoteStore([Note.new("/fake/a.note")])
    app = NotesApp(note_store=store)
    app.initialize()
    store.fail_enumeration = True

    with pytest.raises(StorageError):
        app.refresh_index()
    assert [note.name for note in app.list_all_notes()] == ["a"], (
        "A failed refresh should leave the previous index in place"
    )
