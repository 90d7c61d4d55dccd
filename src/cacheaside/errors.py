"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy for cache-aside execution.

Only ``NotConfiguredError`` and ``ExecutionError`` ever reach the caller of
``Request.execute``; everything else is logged and absorbed.
"""

from __future__ import annotations


class CacheAsideError(RuntimeError):
    """Base class for all cache-aside errors."""


class NotConfiguredError(CacheAsideError):
    """Raised when a request is executed without a computation or target shape."""


class BackendUnavailableError(CacheAsideError):
    """Raised when a backend is not initialized or cannot be reached."""


class CacheMissError(CacheAsideError):
    """Raised when a key is absent from the selected backend."""


class CodecError(CacheAsideError):
    """Base class for payload shape mismatches."""


class EncodeError(CodecError):
    """Raised when a value cannot be represented as a cache payload."""


class DecodeError(CodecError):
    """Raised when a payload cannot be coerced into the declared target shape."""


class ExecutionError(CacheAsideError):
    """Raised when the wrapped computation itself fails."""
