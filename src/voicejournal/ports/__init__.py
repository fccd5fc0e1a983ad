"""Ports - interfaces/protocols for external dependencies."""

from .key_value import KeyValueStore, StorageError, StorageUnavailableError
from .authenticator import Authenticator, AuthenticationError
from .analyzer import Analyzer

__all__ = [
    "KeyValueStore",
    "StorageError",
    "StorageUnavailableError",
    "Authenticator",
    "AuthenticationError",
    "Analyzer",
]
