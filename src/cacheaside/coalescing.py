"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: coalescing.py.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    __slots__ = ("done", "value", "error", "waiters")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None
        self.waiters = 0


class CallCoalescer:
    """Deduplicate identical in-flight calls across threads."""

    def __init__(self) -> None:
        self._calls: dict[str, _Call[Any]] = {}
        self._lock = threading.Lock()

    def run(self, key: str, factory: Callable[[], T]) -> T:
        with self._lock:
            existing = self._calls.get(key)
            if existing is None:
                call: _Call[Any] = _Call()
                self._calls[key] = call
            else:
                existing.waiters += 1

        if existing is not None:
            existing.done.wait()
            if existing.error is not None:
                raise existing.error
            return existing.value

        try:
            call.value = factory()
            return call.value
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                self._calls.pop(key, None)
            call.done.set()

    def in_flight(self) -> int:
        with self._lock:
            return len(self._calls)

    def waiting(self, key: str) -> int:
        """Number of callers currently blocked on the in-flight call for `key`."""
        with self._lock:
            call = self._calls.get(key)
            return call.waiters if call is not None else 0
