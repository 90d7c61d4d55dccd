"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: adapters/local.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..memory import MemoryStore
from ..types import CacheBackend
from .base import BackendAdapter


@dataclass(slots=True)
class LocalAdapter(BackendAdapter):
    """Process-local backend; values round-trip as the same Python objects."""

    store: MemoryStore
    backend: CacheBackend = CacheBackend.LOCAL
    native_values: bool = True

    def get(self, key: str) -> tuple[Any, bool]:
        return self.store.get(key)

    def set(self, key: str, value: Any, ttl_s: float) -> None:
        self.store.set(key, value, ttl_s)
