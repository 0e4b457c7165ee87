"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class BackendSettings:
    database_url: str | None
    host: str
    port: int
    cache_size: int
    log_level: str


def load_settings() -> BackendSettings:
    port_raw = os.getenv("LETTERAVATAR_PORT", "8000")
    cache_size_raw = os.getenv("LETTERAVATAR_CACHE_SIZE", "1024")
    return BackendSettings(
        database_url=os.getenv("LETTERAVATAR_DATABASE_URL"),
        host=os.getenv("LETTERAVATAR_HOST", "127.0.0.1"),
        port=int(port_raw),
        cache_size=int(cache_size_raw),
        log_level=os.getenv("LETTERAVATAR_LOG_LEVEL", "INFO").upper(),
    )
