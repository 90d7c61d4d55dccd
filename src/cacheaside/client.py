"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared cache client handing out cache-aside requests.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from .adapters import BackendAdapter, LocalAdapter, RemoteAdapter
from .coalescing import CallCoalescer
from .errors import BackendUnavailableError
from .memory import MemoryStore
from .settings import CacheSettings
from .types import CacheBackend

if TYPE_CHECKING:
    from .request import Request

logger = logging.getLogger("cacheaside.client")


class CacheClient:
    """
    Process-wide owner of the local store and remote client.

    Build one at startup and pass it to the code that needs caching. Every
    request created from it shares its stores.

    Args:
        remote: A ``redis.Redis`` client, or ``None`` to leave the remote
            backend unconfigured.
        local: A ``MemoryStore``; created on first local use when omitted.
        settings: Client-wide settings.
        owns_remote: Close ``remote`` in ``close()``.
    """

    def __init__(
        self,
        remote: Any | None = None,
        local: MemoryStore | None = None,
        *,
        settings: CacheSettings | None = None,
        owns_remote: bool = False,
    ) -> None:
        self.settings = settings or CacheSettings()
        self.logger = logging.getLogger("cacheaside")
        self._remote = remote
        self._local = local
        self._owns_local = False
        self._owns_remote = owns_remote
        self._lock = threading.Lock()
        self.coalescer = CallCoalescer() if self.settings.single_flight else None

    def local(self) -> "Request[Any]":
        """New request using the in-process store."""
        return self.request(CacheBackend.LOCAL)

    def remote(self) -> "Request[Any]":
        """New request using the remote store."""
        return self.request(CacheBackend.REMOTE)

    def request(self, backend: CacheBackend | str) -> "Request[Any]":
        from .request import Request

        return Request(self, CacheBackend.parse(backend))

    def enable_debug(self) -> "CacheClient":
        """Log every hit, miss and store of this library at DEBUG level."""
        self.logger.setLevel(logging.DEBUG)
        return self

    @property
    def has_remote(self) -> bool:
        return self._remote is not None

    @property
    def local_store(self) -> MemoryStore | None:
        return self._local

    def ensure_local_store(self) -> MemoryStore:
        """Return the local store, creating the default one on first use."""
        with self._lock:
            if self._local is None:
                self._local = MemoryStore(
                    default_ttl_s=self.settings.default_ttl_s,
                    cleanup_interval_s=self.settings.cleanup_interval_s,
                )
                self._owns_local = True
                logger.debug(
                    "Created default local store (ttl=%.0fs, sweep=%.0fs)",
                    self.settings.default_ttl_s,
                    self.settings.cleanup_interval_s,
                )
            return self._local

    def adapter(self, backend: CacheBackend) -> BackendAdapter:
        """
        Resolve the adapter for ``backend``.

        Raises:
            BackendUnavailableError: If the remote backend is requested but no
                remote client was configured.
        """
        if backend is CacheBackend.LOCAL:
            return LocalAdapter(self.ensure_local_store())
        if self._remote is None:
            raise BackendUnavailableError("remote store is not initialized")
        return RemoteAdapter(self._remote, key_prefix=self.settings.key_prefix)

    def close(self) -> None:
        """Stop the local janitor and release connections this client owns."""
        with self._lock:
            local, remote = self._local, self._remote
        if local is not None and self._owns_local:
            local.close()
        if remote is not None and self._owns_remote:
            remote.close()
