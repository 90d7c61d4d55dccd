"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-aside request: fluent configuration plus the get/execute/set flow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .adapters import BackendAdapter
from .codec import Shape, decode, resolve_shape
from .errors import (
    BackendUnavailableError,
    CacheAsideError,
    CacheMissError,
    ExecutionError,
    NotConfiguredError,
)
from .types import CacheBackend, Computation, Expiration, to_seconds

if TYPE_CHECKING:
    from .client import CacheClient

logger = logging.getLogger("cacheaside.request")

T = TypeVar("T")


class Request(Generic[T]):
    """
    One cache-aside operation against a single backend.

    Usage::

        person = (
            client.remote()
            .with_key("person:42")
            .with_expiration(timedelta(minutes=1))
            .with_computation(load_person)
            .with_target_shape(Person)
            .execute(42)
        )

    Cache problems never fail ``execute``: misses, unreachable backends and
    undecodable payloads are logged and the computation runs instead. Only a
    missing computation/target shape (``NotConfiguredError``) or a failing
    computation (``ExecutionError``) is raised.
    """

    def __init__(self, client: "CacheClient", backend: CacheBackend) -> None:
        self._client = client
        self._backend = backend
        self._key = ""
        self._ttl_s = 0.0
        self._computation: Computation | None = None
        self._shape: Shape | None = None
        self._result: Any = None

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    @property
    def key(self) -> str:
        return self._key

    @property
    def ttl_s(self) -> float:
        return self._ttl_s

    @property
    def shape(self) -> Shape | None:
        return self._shape

    @property
    def result(self) -> Any:
        """Last produced or retrieved value (the template before any run)."""
        return self._result

    def with_backend(self, backend: CacheBackend | str) -> "Request[T]":
        """Return a copy of this request bound to another backend."""
        clone: Request[T] = Request(self._client, CacheBackend.parse(backend))
        clone._key = self._key
        clone._ttl_s = self._ttl_s
        clone._computation = self._computation
        clone._shape = self._shape
        clone._result = self._shape.initial if self._shape is not None else None
        return clone

    def with_key(self, key: str) -> "Request[T]":
        self._key = key
        return self

    def with_expiration(self, expiration: Expiration) -> "Request[T]":
        """Set the entry TTL; ``0`` defers to the backend default."""
        self._ttl_s = to_seconds(expiration)
        return self

    def with_computation(self, computation: Computation | None) -> "Request[T]":
        self._computation = computation
        return self

    def with_target_shape(self, template: Any) -> "Request[T]":
        """
        Declare the result shape.

        Accepts a type annotation (``int``, ``list[Person]``, ``Person``) or a
        value template (``0``, ``[]``, ``Person()``). A record instance is
        filled in place on remote hits.
        """
        if template is None:
            self._shape = None
            self._result = None
            return self
        self._shape = resolve_shape(template)
        self._result = self._shape.initial
        return self

    def _validate(self) -> BackendAdapter | None:
        """Resolve the adapter, or log why the cache is bypassed for this call."""
        try:
            adapter = self._client.adapter(self._backend)
        except BackendUnavailableError as exc:
            logger.warning("cache-aside is not in effect. reason: %s", exc)
            return None
        if not self._key:
            logger.warning("cache-aside is not in effect. reason: cache key is not set")
            return None
        return adapter

    def _retrieve(self, adapter: BackendAdapter) -> Any:
        raw, found = adapter.get(self._key)
        if not found:
            raise CacheMissError(
                f"key '{self._key}' not found in {self._backend.value} store"
            )
        if adapter.native_values:
            return raw
        shape = self._shape
        if shape is None:
            raise NotConfiguredError("target shape is not set")
        return decode(raw, shape)

    def _compute_and_store(
        self, adapter: BackendAdapter | None, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> T:
        computation = self._computation
        if computation is None:
            raise NotConfiguredError("computation is not set")
        try:
            value = computation(*args, **kwargs)
        except Exception as exc:
            raise ExecutionError(
                f"computation for key '{self._key}' failed: {exc}"
            ) from exc
        self._result = value
        logger.debug("Computed result for key '%s'", self._key)

        if adapter is not None:
            try:
                adapter.set(self._key, value, self._ttl_s)
            except CacheAsideError as exc:
                logger.warning(
                    "cache write for key '%s' on %s store skipped: %s",
                    self._key,
                    self._backend.value,
                    exc,
                )
        return value

    def execute(self, *args: Any, **kwargs: Any) -> T:
        """
        Serve the cached result for the key, or compute, store and return it.

        Positional and keyword arguments are forwarded to the computation.

        Raises:
            NotConfiguredError: Computation or target shape not set. No cache
                I/O is attempted.
            ExecutionError: The computation raised; the original exception is
                chained as ``__cause__``.
        """
        if self._computation is None or self._shape is None:
            raise NotConfiguredError("computation or target shape is not set")

        adapter = self._validate()
        if adapter is not None:
            try:
                value = self._retrieve(adapter)
            except CacheMissError as exc:
                logger.debug("%s", exc)
            except CacheAsideError as exc:
                logger.warning(
                    "cache read for key '%s' on %s store failed: %s",
                    self._key,
                    self._backend.value,
                    exc,
                )
            else:
                self._result = value
                logger.debug(
                    "Cache hit for key '%s' on %s store", self._key, self._backend.value
                )
                return value

        coalescer = self._client.coalescer
        if coalescer is None or adapter is None:
            return self._compute_and_store(adapter, args, kwargs)

        value = coalescer.run(
            f"{self._backend.value}:{self._key}",
            lambda: self._compute_and_store(adapter, args, kwargs),
        )
        self._result = value
        return value
