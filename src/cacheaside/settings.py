"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-aside settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .memory import DEFAULT_CLEANUP_INTERVAL_S, DEFAULT_TTL_S

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings shared by every request created from one client."""

    # Policy of the local store created lazily by the client.
    default_ttl_s: float = DEFAULT_TTL_S
    cleanup_interval_s: float = DEFAULT_CLEANUP_INTERVAL_S

    key_prefix: str = ""
    single_flight: bool = False
    log_level: str | None = None

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from ``CACHEASIDE_*`` environment variables."""
        return CacheSettings(
            default_ttl_s=float(
                os.getenv("CACHEASIDE_DEFAULT_TTL_S", str(DEFAULT_TTL_S))
            ),
            cleanup_interval_s=float(
                os.getenv(
                    "CACHEASIDE_CLEANUP_INTERVAL_S", str(DEFAULT_CLEANUP_INTERVAL_S)
                )
            ),
            key_prefix=os.getenv("CACHEASIDE_KEY_PREFIX", ""),
            single_flight=os.getenv("CACHEASIDE_SINGLE_FLIGHT", "").strip().lower()
            in _TRUTHY,
            log_level=os.getenv("CACHEASIDE_LOG_LEVEL") or None,
        )
