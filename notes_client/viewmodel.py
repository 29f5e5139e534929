"""
View models for the notes pane.

Plain data built from a ``SessionState`` snapshot, with the display rules
already applied, so a renderer only has to lay it out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from notes_client.domain.entities import Mode, SessionState
from notes_client.domain.schemas import NoteId

UNTITLED = "(Untitled)"
DELETE_CONFIRM_PROMPT = "Delete this note?"

LIST_LOADING = "Loading..."
LIST_EMPTY = "No notes"
PROMPT_SELECT = "Select a note from the list or create a new note."
PROMPT_FIRST_NOTE = "Nothing here yet: start by creating your first note!"


def display_title(title: str) -> str:
    return title or UNTITLED


@dataclass
class NoteListItem:
    id: NoteId
    label: str
    selected: bool = False


@dataclass
class NotesView:
    items: List[NoteListItem] = field(default_factory=list)
    list_placeholder: Optional[str] = None
    show_form: bool = False
    form_title: str = ""
    form_content: str = ""
    submit_label: str = "Create"
    show_detail: bool = False
    detail_title: str = ""
    detail_content: str = ""
    empty_prompt: Optional[str] = None
    error: str = ""
    controls_disabled: bool = False
    can_edit: bool = False
    can_delete: bool = False


def build_view(state: SessionState) -> NotesView:
    items = [
        NoteListItem(id=n.id, label=display_title(n.title), selected=n.id == state.selected_id)
        for n in state.notes
    ]
    placeholder = None
    if not items:
        placeholder = LIST_LOADING if state.pending else LIST_EMPTY

    show_form = state.mode is not Mode.BROWSING
    view = NotesView(
        items=items,
        list_placeholder=placeholder,
        show_form=show_form,
        form_title=state.form_title,
        form_content=state.form_content,
        submit_label="Save" if state.detail is not None else "Create",
        error=state.error_message,
        controls_disabled=state.pending,
    )

    if state.is_viewing and state.detail is not None:
        view.show_detail = True
        view.detail_title = display_title(state.detail.title)
        view.detail_content = state.detail.content
        view.can_edit = not state.pending
        view.can_delete = not state.pending
    elif state.selected_id is None and not show_form:
        view.empty_prompt = PROMPT_SELECT if items else PROMPT_FIRST_NOTE
    return view
