"""Adapters - I/O implementations of ports."""

from .file_storage import FileKeyValueStore
from .memory_storage import MemoryKeyValueStore
from .mock_auth import MockAuthenticator
from .mock_analyzer import MockAnalyzer

__all__ = [
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "MockAuthenticator",
    "MockAnalyzer",
]
