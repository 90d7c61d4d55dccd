"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared types used across backends, codec and requests.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import timedelta
from enum import Enum
from typing import Any, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]

Computation: TypeAlias = Callable[..., Any]
Expiration: TypeAlias = timedelta | float | int

_BACKEND_ALIASES = {
    "local": "local",
    "mem": "local",
    "memory": "local",
    "inmemory": "local",
    "in_memory": "local",
    "remote": "remote",
    "redis": "remote",
}


class CacheBackend(str, Enum):
    """Backend a request reads from and writes to."""

    LOCAL = "local"
    REMOTE = "remote"

    @classmethod
    def parse(cls, value: "CacheBackend | str") -> "CacheBackend":
        """Resolve a backend from the enum itself or one of its aliases."""
        if isinstance(value, CacheBackend):
            return value
        key = str(value).strip().lower()
        resolved = _BACKEND_ALIASES.get(key)
        if resolved is None:
            raise ValueError(f"Unknown cache backend '{value}'")
        return cls(resolved)


def to_seconds(expiration: Expiration) -> float:
    """Normalize an expiration into finite, non-negative seconds."""
    if isinstance(expiration, timedelta):
        seconds = expiration.total_seconds()
    else:
        seconds = float(expiration)
    if not math.isfinite(seconds):
        raise ValueError("expiration must be finite")
    if seconds < 0:
        raise ValueError("expiration must be >= 0")
    return seconds
