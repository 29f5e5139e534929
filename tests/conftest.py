from __future__ import annotations

from typing import Any, Optional

import anyio
import httpx
import pytest
from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel

from notes_client.api.client import NotesApiClient
from notes_client.api.result import ApiResult
from notes_client.domain.schemas import Note, NoteId


@pytest.fixture
def anyio_backend():
    return "asyncio"


class _NoteIn(BaseModel):
    title: str
    content: str


def create_fake_backend(seed: list[dict[str, Any]] | None = None) -> FastAPI:
    """In-memory stand-in for the notes backend (oldest-first listing)."""
    app = FastAPI()
    notes: dict[int, dict[str, Any]] = {}
    counter = {"next": 1}

    def _stamp() -> str:
        return f"2025-01-01T00:00:{counter['next']:02d}Z"

    for item in seed or []:
        notes[item["id"]] = dict(item)
        counter["next"] = max(counter["next"], item["id"] + 1)

    @app.get("/notes")
    def list_notes():
        return list(notes.values())

    @app.get("/notes/{note_id}")
    def get_note(note_id: int):
        if note_id not in notes:
            raise HTTPException(status_code=404, detail="Note not found")
        return notes[note_id]

    @app.post("/notes", status_code=201)
    def create_note(payload: _NoteIn):
        note_id = counter["next"]
        notes[note_id] = {"id": note_id, "title": payload.title, "content": payload.content, "created_at": _stamp()}
        counter["next"] += 1
        return notes[note_id]

    @app.put("/notes/{note_id}")
    def update_note(note_id: int, payload: _NoteIn):
        if note_id not in notes:
            raise HTTPException(status_code=404, detail="Note not found")
        notes[note_id] = {**notes[note_id], "title": payload.title, "content": payload.content}
        return notes[note_id]

    @app.delete("/notes/{note_id}", status_code=204)
    def delete_note(note_id: int):
        if notes.pop(note_id, None) is None:
            raise HTTPException(status_code=404, detail="Note not found")
        return Response(status_code=204)

    app.state.notes = notes
    return app


@pytest.fixture
def backend() -> FastAPI:
    return create_fake_backend(
        seed=[
            {"id": 1, "title": "First", "content": "one", "created_at": "2024-12-31T00:00:01Z"},
            {"id": 2, "title": "", "content": "two", "created_at": "2024-12-31T00:00:02Z"},
            {"id": 5, "title": "Fifth", "content": "five", "created_at": "2024-12-31T00:00:05Z"},
        ]
    )


@pytest.fixture
def api_client(backend: FastAPI) -> NotesApiClient:
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=backend), base_url="http://testserver")
    return NotesApiClient("http://testserver", http=http)


class FakeNotesApi:
    """Scripted NotesApi.

    ``failures`` maps an operation name to a failed result, ``responses`` to a
    canned successful result and ``errors`` to an exception to raise.
    ``gates`` maps an operation name (or an ``(op, *args)`` tuple) to an
    ``anyio.Event`` the call waits on.
    """

    def __init__(self, notes: list[Note] | None = None) -> None:
        self.notes: dict[NoteId, Note] = {n.id: n for n in notes or []}
        self.calls: list[tuple[Any, ...]] = []
        self.failures: dict[str, ApiResult[Any]] = {}
        self.responses: dict[str, ApiResult[Any]] = {}
        self.errors: dict[str, BaseException] = {}
        self.gates: dict[Any, anyio.Event] = {}
        self.next_id = 100

    async def _enter(self, op: str, *args: Any) -> Optional[ApiResult[Any]]:
        self.calls.append((op, *args))
        gate = self.gates.get((op, *args)) or self.gates.get(op)
        if gate is not None:
            await gate.wait()
        if op in self.errors:
            raise self.errors[op]
        return self.failures.get(op) or self.responses.get(op)

    async def list_notes(self) -> ApiResult[list[Note]]:
        failed = await self._enter("list_notes")
        return failed or ApiResult.success(list(self.notes.values()))

    async def get_note(self, note_id: NoteId) -> ApiResult[Note]:
        failed = await self._enter("get_note", note_id)
        if failed:
            return failed
        if note_id not in self.notes:
            return ApiResult.failure("Note not found", 404)
        return ApiResult.success(self.notes[note_id])

    async def create_note(self, title: str, content: str) -> ApiResult[Note]:
        failed = await self._enter("create_note", title, content)
        if failed:
            return failed
        note = Note(id=self.next_id, title=title, content=content)
        self.next_id += 1
        self.notes[note.id] = note
        return ApiResult.success(note)

    async def update_note(self, note_id: NoteId, title: str, content: str) -> ApiResult[Note]:
        failed = await self._enter("update_note", note_id, title, content)
        if failed:
            return failed
        note = Note(id=note_id, title=title, content=content, updated_at="later")
        self.notes[note_id] = note
        return ApiResult.success(note)

    async def delete_note(self, note_id: NoteId) -> ApiResult[None]:
        failed = await self._enter("delete_note", note_id)
        if failed:
            return failed
        self.notes.pop(note_id, None)
        return ApiResult.success(None)


@pytest.fixture
def fake_api() -> FakeNotesApi:
    return FakeNotesApi(
        [
            Note(id=1, title="First", content="one"),
            Note(id=2, title="", content="two"),
            Note(id=5, title="Fifth", content="five"),
        ]
    )
