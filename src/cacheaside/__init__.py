"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-aside execution for arbitrary Python callables.

Results are served from an in-process store or from Redis when present, and
computed then stored otherwise. Cache failures never fail the call.

Quick start::

    from datetime import timedelta

    import redis
    from cacheaside import CacheClient

    client = CacheClient(redis.Redis())

    total = (
        client.remote()
        .with_key("orders:total")
        .with_expiration(timedelta(minutes=1))
        .with_computation(compute_total)
        .with_target_shape(int)
        .execute()
    )
"""

from .adapters import BackendAdapter, LocalAdapter, RemoteAdapter
from .client import CacheClient
from .codec import Shape, ShapeKind, decode, encode, resolve_shape
from .errors import (
    BackendUnavailableError,
    CacheAsideError,
    CacheMissError,
    CodecError,
    DecodeError,
    EncodeError,
    ExecutionError,
    NotConfiguredError,
)
from .factory import create_cache_client_from_env
from .memory import (
    DEFAULT_CLEANUP_INTERVAL_S,
    DEFAULT_TTL_S,
    NO_EXPIRATION,
    MemoryStore,
)
from .request import Request
from .settings import CacheSettings
from .types import CacheBackend

__all__ = [
    "CacheBackend",
    "CacheClient",
    "CacheSettings",
    "Request",
    "create_cache_client_from_env",
    "BackendAdapter",
    "LocalAdapter",
    "RemoteAdapter",
    "MemoryStore",
    "DEFAULT_TTL_S",
    "DEFAULT_CLEANUP_INTERVAL_S",
    "NO_EXPIRATION",
    "Shape",
    "ShapeKind",
    "resolve_shape",
    "encode",
    "decode",
    "CacheAsideError",
    "NotConfiguredError",
    "BackendUnavailableError",
    "CacheMissError",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "ExecutionError",
]
