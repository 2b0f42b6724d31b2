from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from tagnotes.api.auth import verify_credentials
from tagnotes.api.schemas import (
    NoteContentUpdate,
    NoteCreate,
    NoteResponse,
    NoteTagsUpdate,
    TagsResponse,
)
from tagnotes.exceptions import (
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
    NotesError,
)
from tagnotes.index.base import IndexStats
from tagnotes.notes_app import NotesApp, SearchKind


def _http_error(err: NotesError) -> HTTPException:
    """Map a note error onto an HTTP error response."""
    if isinstance(err, NoteNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    if isinstance(err, NoteAlreadyExistsError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Note already exists")
    if isinstance(err, InvalidNoteNameError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid note name")

    logger.error(f"Note operation failed: {err}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=err.message)


def _create_notes_router(notes_app: NotesApp) -> APIRouter:
    router = APIRouter(dependencies=[Depends(verify_credentials)])

    @router.get("/notes")
    def list_notes() -> List[NoteResponse]:
        return [NoteResponse.from_note(note) for note in notes_app.list_all_notes()]

    @router.post("/notes", status_code=status.HTTP_201_CREATED)
    def create_note(body: NoteCreate) -> NoteResponse:
        try:
            notes_app.create_note(body.name, body.content)
            return NoteResponse.from_note(notes_app.get_note(body.name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.get("/notes/{name:path}")
    def get_note(name: str) -> NoteResponse:
        try:
            return NoteResponse.from_note(notes_app.get_note(name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.put("/notes/{name:path}")
    def update_note_content(name: str, body: NoteContentUpdate) -> NoteResponse:
        try:
            notes_app.update_note_content(name, body.content)
            return NoteResponse.from_note(notes_app.get_note(name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.delete("/notes/{name:path}")
    def delete_note(name: str) -> dict:
        try:
            notes_app.delete_note(name)
        except NotesError as err:
            raise _http_error(err) from err
        return {"deleted": name}

    @router.get("/search")
    def search_notes(q: str = "", kind: str = SearchKind.CONTENT.value) -> List[NoteResponse]:
        return [NoteResponse.from_note(note) for note in notes_app.search_notes(q, kind)]

    @router.get("/tags")
    def list_tags() -> TagsResponse:
        return TagsResponse(tags=sorted(notes_app.get_all_tags()))

    @router.post("/tags/set")
    def set_tags(body: NoteTagsUpdate) -> NoteResponse:
        try:
            notes_app.update_note_tags(body.name, body.tags)
            return NoteResponse.from_note(notes_app.get_note(body.name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.post("/tags/add")
    def add_tags(body: NoteTagsUpdate) -> NoteResponse:
        try:
            notes_app.add_tags_to_note(body.name, body.tags)
            return NoteResponse.from_note(notes_app.get_note(body.name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.post("/tags/remove")
    def remove_tags(body: NoteTagsUpdate) -> NoteResponse:
        try:
            notes_app.remove_tags_from_note(body.name, body.tags)
            return NoteResponse.from_note(notes_app.get_note(body.name))
        except NotesError as err:
            raise _http_error(err) from err

    @router.get("/stats")
    def get_stats() -> IndexStats:
        return notes_app.get_stats()

    @router.post("/refresh")
    def refresh_index() -> IndexStats:
        try:
            notes_app.refresh_index()
        except NotesError as err:
            raise _http_error(err) from err
        return notes_app.get_stats()

    return router


def get_endpoints_router(*, notes_app: NotesApp) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    def health_check():
        return {"status": "healthy"}

    router.include_router(_create_notes_router(notes_app), prefix="/api")

    return router
