"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: adapters/base.py.
"""

from __future__ import annotations

from typing import Any, Protocol

from ..types import CacheBackend


class BackendAdapter(Protocol):
    """Uniform get/set surface over one cache backend."""

    backend: CacheBackend
    # True when `get` hands back the stored object itself, False for payloads.
    native_values: bool

    def get(self, key: str) -> tuple[Any, bool]: ...

    def set(self, key: str, value: Any, ttl_s: float) -> None: ...
