"""Request and response bodies for the JSON API."""

from pydantic import BaseModel

from tagnotes.domain.note import Note


class NoteCreate(BaseModel):
    name: str
    content: str = ""


class NoteContentUpdate(BaseModel):
    content: str


class NoteTagsUpdate(BaseModel):
    """Tags to set, add or remove on the named note."""

    name: str
    tags: list[str]


class NoteResponse(BaseModel):
    path: str
    name: str
    content: str
    tags: list[str]
    modified: float

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(
            path=note.path,
            name=note.name,
            content=note.content,
            tags=list(note.tags),
            modified=note.modified,
        )


class TagsResponse(BaseModel):
    tags: list[str]
