"""Async HTTP client for the notes backend."""
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from notes_client.api.result import ApiResult
from notes_client.domain.exceptions import TransportError
from notes_client.domain.schemas import Note, NoteId, NoteWrite

logger = logging.getLogger("notes_client.api")

_NOTE_LIST = TypeAdapter(list[Note])


def _extract_detail(response: httpx.Response) -> Optional[str]:
    """Pull the backend's ``{"detail": ...}`` message out of an error response."""

    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str) and detail:
            return detail
    return None


def _failure_message(response: httpx.Response) -> str:
    return _extract_detail(response) or response.reason_phrase or f"HTTP {response.status_code}"


class NotesApiClient:
    """Thin wrapper around the ``/notes`` endpoints.

    HTTP error statuses come back as failed ``ApiResult`` values. Only
    transport faults (connection errors, invalid URLs, undecodable or
    mis-shaped 2xx bodies) raise ``TransportError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float | None = None,
        http: httpx.AsyncClient | None = None,
        debug_log: bool = False,
    ) -> None:
        if http is None:
            if not base_url:
                raise ValueError("base_url must be provided")
            kwargs: dict[str, Any] = {"base_url": base_url.rstrip("/")}
            if timeout_s is not None:
                kwargs["timeout"] = timeout_s
            http = httpx.AsyncClient(**kwargs)
            self._owns_http = True
        else:
            self._owns_http = False
        self._http = http
        self.debug_log = debug_log

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def request(
        self, method: str, path: str, json: Any = None, *, parse_body: bool = True
    ) -> ApiResult[Any]:
        request_id = str(uuid.uuid4())
        headers = {"X-Request-ID": request_id}
        start = time.perf_counter()
        try:
            response = await self._http.request(method, path, json=json, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                "request_error",
                extra={"rid": request_id, "method": method, "path": path, "error": type(e).__name__},
            )
            raise TransportError(f"request_failed: {method} {path}") from e

        dt_ms = (time.perf_counter() - start) * 1000.0
        if self.debug_log:
            logger.info(
                "request",
                extra={
                    "rid": request_id,
                    "method": method,
                    "path": path,
                    "payload_keys": sorted(json) if isinstance(json, dict) else None,
                    "status": response.status_code,
                    "ms": dt_ms,
                },
            )
        else:
            logger.info(
                "request",
                extra={"method": method, "path": path, "status": response.status_code, "ms": dt_ms},
            )

        if not response.is_success:
            return ApiResult.failure(_failure_message(response), response.status_code)
        if not parse_body or not response.content:
            return ApiResult.success(None)
        try:
            return ApiResult.success(response.json())
        except ValueError as e:
            raise TransportError(f"bad_json: {method} {path}") from e

    async def list_notes(self) -> ApiResult[list[Note]]:
        result = await self.request("GET", "/notes")
        if not result.ok:
            return result
        try:
            return ApiResult.success(_NOTE_LIST.validate_python(result.data))
        except ValidationError as e:
            raise TransportError("bad_response: GET /notes") from e

    async def get_note(self, note_id: NoteId) -> ApiResult[Note]:
        return await self._note_call("GET", f"/notes/{note_id}")

    async def create_note(self, title: str, content: str) -> ApiResult[Note]:
        body = NoteWrite(title=title, content=content).model_dump()
        return await self._note_call("POST", "/notes", body)

    async def update_note(self, note_id: NoteId, title: str, content: str) -> ApiResult[Note]:
        body = NoteWrite(title=title, content=content).model_dump()
        return await self._note_call("PUT", f"/notes/{note_id}", body)

    async def delete_note(self, note_id: NoteId) -> ApiResult[None]:
        result = await self.request("DELETE", f"/notes/{note_id}", parse_body=False)
        if not result.ok:
            return result
        return ApiResult.success(None)

    async def _note_call(self, method: str, path: str, body: Any = None) -> ApiResult[Note]:
        result = await self.request(method, path, body)
        if not result.ok:
            return result
        try:
            return ApiResult.success(Note.model_validate(result.data))
        except ValidationError as e:
            raise TransportError(f"bad_response: {method} {path}") from e
