"""Note session controller.

Owns the session snapshot, turns user intents into backend calls and folds
the results back into state. At most one request is in flight per session;
``pending`` is the guard. A newer selection supersedes an in-flight detail
fetch, and the superseded response is dropped on arrival.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

from notes_client.api.result import ApiResult
from notes_client.domain.entities import ErrorKind, Mode, SessionState
from notes_client.domain.exceptions import NotesClientError
from notes_client.domain.ports import NotesApi
from notes_client.domain.schemas import Note, NoteId
from notes_client.session.store import Listener, SessionStore

logger = logging.getLogger("notes_client.session")

_FORM_FIELDS = {"title": "form_title", "content": "form_content"}

_CLEAR_ERROR = {"error_message": "", "error_kind": None}
_BLANK_FORM = {"form_title": "", "form_content": ""}


def _unique_by_id(notes: Iterable[Note]) -> tuple[Note, ...]:
    seen: set[NoteId] = set()
    out: list[Note] = []
    for note in notes:
        if note.id in seen:
            continue
        seen.add(note.id)
        out.append(note)
    return tuple(out)


class NoteSessionController:
    def __init__(self, api: NotesApi, store: SessionStore | None = None) -> None:
        self._api = api
        self._store = store or SessionStore()
        self._inflight: Optional[str] = None
        self._detail_generation = 0

    @property
    def state(self) -> SessionState:
        return self._store.snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    def _begin(self, request: str, **changes: Any) -> None:
        self._inflight = request
        self._store.update(pending=True, **changes)

    def _settle(self, **changes: Any) -> None:
        self._inflight = None
        self._store.update(pending=False, **changes)

    def _settle_failed(self, kind: ErrorKind, result: ApiResult[Any], **changes: Any) -> None:
        error = result.error
        logger.warning(
            kind.value,
            extra={
                "status": error.status if error else None,
                "api_message": error.message if error else None,
            },
        )
        self._settle(error_message=kind.message, error_kind=kind, **changes)

    async def _call(
        self,
        op: Callable[..., Awaitable[ApiResult[Any]]],
        *args: Any,
        generation: Optional[int] = None,
    ) -> ApiResult[Any]:
        try:
            return await op(*args)
        except NotesClientError as e:
            return ApiResult.failure(str(e))
        except BaseException:
            # Unexpected errors and cancellation still release the guard.
            if generation is None or generation == self._detail_generation:
                self._settle()
            raise

    async def start(self) -> None:
        if self.state.pending:
            return
        self._detail_generation += 1
        self._begin(
            "list",
            selected_id=None,
            detail=None,
            mode=Mode.BROWSING,
            **_BLANK_FORM,
        )
        result = await self._call(self._api.list_notes)
        if result.ok:
            # The backend lists oldest-first.
            notes = _unique_by_id(reversed(result.data or []))
            logger.info("notes_loaded", extra={"count": len(notes)})
            self._settle(notes=notes, **_CLEAR_ERROR)
        else:
            self._settle_failed(ErrorKind.LOAD_LIST_FAILED, result, notes=())

    async def select_note(self, note_id: NoteId) -> None:
        if self.state.pending and self._inflight != "detail":
            return
        self._detail_generation += 1
        generation = self._detail_generation
        self._begin(
            "detail",
            selected_id=note_id,
            detail=None,
            mode=Mode.BROWSING,
            **_BLANK_FORM,
            **_CLEAR_ERROR,
        )
        result = await self._call(self._api.get_note, note_id, generation=generation)
        if generation != self._detail_generation:
            logger.info("detail_stale", extra={"note_id": note_id})
            return
        if result.ok:
            self._settle(detail=result.data, mode=Mode.BROWSING, **_CLEAR_ERROR)
        else:
            self._settle_failed(ErrorKind.LOAD_DETAIL_FAILED, result)

    def start_create(self) -> None:
        if self.state.pending:
            return
        self._detail_generation += 1
        self._store.update(
            selected_id=None,
            detail=None,
            mode=Mode.CREATING,
            **_BLANK_FORM,
            **_CLEAR_ERROR,
        )

    def start_edit(self) -> None:
        state = self.state
        if state.pending or state.detail is None or state.mode is not Mode.BROWSING:
            return
        self._store.update(
            mode=Mode.EDITING,
            form_title=state.detail.title,
            form_content=state.detail.content,
        )

    def edit_field(self, name: str, value: str) -> None:
        attr = _FORM_FIELDS.get(name)
        if attr is None:
            raise ValueError(f"unknown form field: {name!r}")
        self._store.update(**{attr: value})

    async def submit(self) -> None:
        state = self.state
        if state.pending or state.mode is Mode.BROWSING:
            return
        if not state.form_title.strip() or not state.form_content.strip():
            kind = ErrorKind.VALIDATION_FAILED
            logger.info(kind.value, extra={"mode": state.mode.value})
            self._store.update(error_message=kind.message, error_kind=kind)
            return

        if state.mode is Mode.EDITING:
            note_id = state.detail.id
            self._begin("save")
            result = await self._call(self._api.update_note, note_id, state.form_title, state.form_content)
            if not result.ok:
                self._settle_failed(ErrorKind.SAVE_FAILED, result)
                return
            note: Note = result.data
            notes = tuple(note if n.id == note.id else n for n in self.state.notes)
            logger.info("note_updated", extra={"note_id": note.id})
            self._settle(
                notes=notes,
                detail=note,
                mode=Mode.BROWSING,
                **_BLANK_FORM,
                **_CLEAR_ERROR,
            )
            return

        self._begin("save")
        result = await self._call(self._api.create_note, state.form_title, state.form_content)
        if not result.ok:
            self._settle_failed(ErrorKind.SAVE_FAILED, result)
            return
        note = result.data
        notes = (note,) + tuple(n for n in self.state.notes if n.id != note.id)
        logger.info("note_created", extra={"note_id": note.id})
        self._settle(
            notes=notes,
            selected_id=note.id,
            detail=note,
            mode=Mode.BROWSING,
            **_BLANK_FORM,
            **_CLEAR_ERROR,
        )

    def cancel(self) -> None:
        state = self.state
        if state.pending or state.mode is Mode.BROWSING:
            return
        changes: dict[str, Any] = {"mode": Mode.BROWSING, **_CLEAR_ERROR}
        if state.detail is None:
            changes.update(_BLANK_FORM)
        self._store.update(**changes)

    async def delete(self) -> None:
        """Delete the note in ``detail``. Confirmation is the caller's job."""
        state = self.state
        if state.pending or state.detail is None:
            return
        note_id = state.detail.id
        self._begin("delete")
        result = await self._call(self._api.delete_note, note_id)
        if not result.ok:
            self._settle_failed(ErrorKind.DELETE_FAILED, result)
            return
        logger.info("note_deleted", extra={"note_id": note_id})
        self._settle(
            notes=tuple(n for n in self.state.notes if n.id != note_id),
            selected_id=None,
            detail=None,
            mode=Mode.BROWSING,
            **_BLANK_FORM,
            **_CLEAR_ERROR,
        )
