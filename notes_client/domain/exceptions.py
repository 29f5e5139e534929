from __future__ import annotations


class NotesClientError(RuntimeError):
    pass


class TransportError(NotesClientError):
    """The request never produced a usable response (network fault, bad JSON, bad shape)."""
