"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

In-process TTL store backing the local cache backend.
"""

from __future__ import annotations

import logging
import threading
import time
import weakref
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("cacheaside.memory")

DEFAULT_TTL_S = 3600.0
DEFAULT_CLEANUP_INTERVAL_S = 3600.0
NO_EXPIRATION = -1.0


@dataclass(frozen=True, slots=True)
class MemoryEntry:
    """One stored value with its absolute expiry (``None`` never expires)."""

    value: Any
    expires_at_s: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at_s is not None and self.expires_at_s <= now


class MemoryStore:
    """
    Thread-safe key/value map with per-entry TTL.

    Values are kept as the caller's own objects, no copies and no
    serialization. Expired entries are dropped lazily on access and by a
    background janitor thread every ``cleanup_interval_s`` seconds.

    Args:
        default_ttl_s: TTL used when ``set`` is called with ``ttl_s == 0``.
        cleanup_interval_s: Janitor sweep period; ``<= 0`` disables it.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        default_ttl_s: float = DEFAULT_TTL_S,
        cleanup_interval_s: float = DEFAULT_CLEANUP_INTERVAL_S,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_s = default_ttl_s
        self.cleanup_interval_s = cleanup_interval_s
        self._clock = clock
        self._rows: dict[str, MemoryEntry] = {}
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._janitor: threading.Thread | None = None
        if cleanup_interval_s > 0:
            self._janitor = threading.Thread(
                target=_sweep_forever,
                args=(weakref.ref(self), self._stop, cleanup_interval_s),
                name="cacheaside-janitor",
                daemon=True,
            )
            self._janitor.start()
            weakref.finalize(self, self._stop.set)

    def _expiry_for(self, ttl_s: float) -> float | None:
        if ttl_s == 0:
            ttl_s = self.default_ttl_s
        if ttl_s < 0:
            return None
        return self._clock() + ttl_s

    def get(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, True)`` on a live hit, ``(None, False)`` otherwise."""
        with self._lock:
            row = self._rows.get(key)
            if row is None:
                return None, False
            if row.expired(self._clock()):
                self._rows.pop(key, None)
                return None, False
            return row.value, True

    def set(self, key: str, value: Any, ttl_s: float = 0.0) -> None:
        """Store ``value``, replacing any previous entry and its TTL."""
        entry = MemoryEntry(value=value, expires_at_s=self._expiry_for(ttl_s))
        with self._lock:
            self._rows[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._rows.pop(key, None)

    def delete_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [key for key, row in self._rows.items() if row.expired(now)]
            for key in stale:
                del self._rows[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def close(self) -> None:
        """Stop the janitor thread; stored values stay readable."""
        self._stop.set()

    @property
    def closed(self) -> bool:
        return self._stop.is_set()


def _sweep_forever(
    ref: "weakref.ReferenceType[MemoryStore]",
    stop: threading.Event,
    interval_s: float,
) -> None:
    """Janitor loop; holds the store weakly so it can still be collected."""
    while not stop.wait(interval_s):
        store = ref()
        if store is None:
            return
        try:
            removed = store.delete_expired()
        except Exception:
            logger.exception("MemoryStore sweep failed")
        else:
            if removed:
                logger.debug("MemoryStore swept %d expired entries", removed)
        del store
