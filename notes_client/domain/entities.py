from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from notes_client.domain.schemas import Note, NoteId


class Mode(str, Enum):
    BROWSING = "browsing"
    CREATING = "creating"
    EDITING = "editing"


class ErrorKind(str, Enum):
    LOAD_LIST_FAILED = "load_list_failed"
    LOAD_DETAIL_FAILED = "load_detail_failed"
    VALIDATION_FAILED = "validation_failed"
    SAVE_FAILED = "save_failed"
    DELETE_FAILED = "delete_failed"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.LOAD_LIST_FAILED: "Could not load notes.",
    ErrorKind.LOAD_DETAIL_FAILED: "Failed to load note.",
    ErrorKind.VALIDATION_FAILED: "Title and content cannot be empty.",
    ErrorKind.SAVE_FAILED: "Failed to save note.",
    ErrorKind.DELETE_FAILED: "Failed to delete note.",
}


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot handed to the presentation layer.

    ``notes`` is newest-first. ``detail`` is only set once the fetch for
    ``selected_id`` has completed.
    """

    notes: tuple[Note, ...] = ()
    selected_id: NoteId | None = None
    detail: Note | None = None
    mode: Mode = Mode.BROWSING
    form_title: str = ""
    form_content: str = ""
    pending: bool = False
    error_message: str = ""
    error_kind: ErrorKind | None = None

    @property
    def is_viewing(self) -> bool:
        return self.mode is Mode.BROWSING and self.selected_id is not None and self.detail is not None
