from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

NoteId = Union[int, str]


class Note(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: NoteId
    title: str = ""
    content: str = ""


class NoteWrite(BaseModel):
    title: str
    content: str
