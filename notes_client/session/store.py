from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from notes_client.domain.entities import SessionState

logger = logging.getLogger("notes_client.session")

Listener = Callable[[SessionState], None]


class SessionStore:
    """Holds the current snapshot and pushes every new one to subscribers."""

    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial or SessionState()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes: Any) -> SessionState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("listener_error", extra={"listener": getattr(listener, "__name__", repr(listener))})
        return self._state
