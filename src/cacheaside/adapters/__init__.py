"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: adapters/__init__.py.
"""

from .base import BackendAdapter
from .local import LocalAdapter
from .remote import RemoteAdapter

__all__ = [
    "BackendAdapter",
    "LocalAdapter",
    "RemoteAdapter",
]
