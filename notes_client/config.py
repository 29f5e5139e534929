from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    api_timeout_s: float | None
    debug_log: bool


def load_settings() -> Settings:
    api_base_url = os.environ.get("NOTES_API_BASE_URL", "http://localhost:8000")
    timeout_raw = os.environ.get("NOTES_API_TIMEOUT_S")
    api_timeout_s = float(timeout_raw) if timeout_raw else None
    debug_log = os.environ.get("NOTES_CLIENT_DEBUG_LOG", "false").lower() == "true"
    return Settings(
        api_base_url=api_base_url,
        api_timeout_s=api_timeout_s,
        debug_log=debug_log,
    )
