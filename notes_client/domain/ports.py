from __future__ import annotations

from typing import Protocol, runtime_checkable

from notes_client.api.result import ApiResult
from notes_client.domain.schemas import Note, NoteId


@runtime_checkable
class NotesApi(Protocol):
    async def list_notes(self) -> ApiResult[list[Note]]:
        ...

    async def get_note(self, note_id: NoteId) -> ApiResult[Note]:
        ...

    async def create_note(self, title: str, content: str) -> ApiResult[Note]:
        ...

    async def update_note(self, note_id: NoteId, title: str, content: str) -> ApiResult[Note]:
        ...

    async def delete_note(self, note_id: NoteId) -> ApiResult[None]:
        ...
