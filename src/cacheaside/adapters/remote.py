"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: adapters/remote.py.
"""

from __future__ import annotations

import logging
from typing import Any

from redis.exceptions import RedisError

from ..codec import encode
from ..errors import BackendUnavailableError
from ..types import CacheBackend
from .base import BackendAdapter

logger = logging.getLogger("cacheaside.adapters.remote")


class RemoteAdapter(BackendAdapter):
    """
    Redis-backed backend storing JSON payloads.

    Args:
        redis: A ``redis.Redis`` client (or anything exposing ``get`` and
            ``set(key, value, px=...)``).
        key_prefix: Optional namespace prepended as ``{prefix}:{key}``.
    """

    backend = CacheBackend.REMOTE
    native_values = False

    def __init__(self, redis: Any, *, key_prefix: str = "") -> None:
        self._redis = redis
        self._prefix = key_prefix.strip().rstrip(":")

    def _key(self, key: str) -> str:
        if not self._prefix:
            return key
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> tuple[bytes | None, bool]:
        """Return the raw payload; connection problems raise ``BackendUnavailableError``."""
        try:
            payload = self._redis.get(self._key(key))
        except RedisError as exc:
            raise BackendUnavailableError(
                f"get '{key}' failed on remote store: {exc}"
            ) from exc
        if payload is None:
            return None, False
        return payload, True

    def set(self, key: str, value: Any, ttl_s: float) -> None:
        """Encode ``value`` and store it; ``ttl_s == 0`` stores without expiry."""
        payload = encode(value)
        px = max(1, int(round(ttl_s * 1000))) if ttl_s > 0 else None
        try:
            self._redis.set(self._key(key), payload, px=px)
        except RedisError as exc:
            raise BackendUnavailableError(
                f"set '{key}' failed on remote store: {exc}"
            ) from exc
        logger.debug("Stored %d bytes under '%s' (px=%s)", len(payload), key, px)
