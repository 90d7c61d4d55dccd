"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for building a cache client from environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from .client import CacheClient
from .memory import MemoryStore
from .settings import CacheSettings


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def _redis_url_from_env() -> str | None:
    url = _env_first("CACHEASIDE_REDIS_URL")
    if url:
        return url
    host = _env_first("CACHEASIDE_REDIS_HOST")
    if not host:
        return None
    port = _env_first("CACHEASIDE_REDIS_PORT", default="6379") or "6379"
    db = _env_first("CACHEASIDE_REDIS_DB", default="0") or "0"
    password = _env_first("CACHEASIDE_REDIS_PASSWORD", default="") or ""
    if password:
        return f"redis://:{password}@{host}:{port}/{db}"
    return f"redis://{host}:{port}/{db}"


def create_cache_client_from_env(
    *,
    redis_client: Any | None = None,
    local_store: MemoryStore | None = None,
) -> CacheClient:
    """
    Create a cache client from `CACHEASIDE_*` environment variables.

    Redis resolution:
    - Uses the provided `redis_client` when supplied.
    - Otherwise builds a client from `CACHEASIDE_REDIS_URL`.
    - If no URL is set, falls back to host/port/db/password variables.
    - With neither, the remote backend stays unconfigured.

    The local store is left to lazy creation unless `local_store` is given.
    """
    settings = CacheSettings.from_env()
    if settings.log_level:
        logging.getLogger("cacheaside").setLevel(settings.log_level.upper())

    client = redis_client
    owns_remote = False
    if client is None:
        url = _redis_url_from_env()
        if url:
            import redis

            client = redis.Redis.from_url(url)
            owns_remote = True

    return CacheClient(
        client,
        local_store,
        settings=settings,
        owns_remote=owns_remote,
    )
