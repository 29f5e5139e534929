from __future__ import annotations

from functools import lru_cache

from notes_client.api.client import NotesApiClient
from notes_client.config import Settings, load_settings
from notes_client.session.controller import NoteSessionController


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


def build_api_client(settings: Settings | None = None) -> NotesApiClient:
    settings = settings or get_settings()
    return NotesApiClient(
        settings.api_base_url,
        timeout_s=settings.api_timeout_s,
        debug_log=settings.debug_log,
    )


def create_controller(settings: Settings | None = None) -> NoteSessionController:
    return NoteSessionController(build_api_client(settings))
