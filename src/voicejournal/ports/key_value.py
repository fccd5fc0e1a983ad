"""Key-value persistence interface."""

from typing import Protocol


class StorageError(Exception):
    """Raised when a storage read or write fails."""

    pass


class StorageUnavailableError(StorageError):
    """Raised when the storage backend cannot be used at all."""

    pass


class KeyValueStore(Protocol):
    """Interface for durable string storage keyed by name."""

    async def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key. Raises StorageError on failure."""
        ...

    async def remove(self, key: str) -> None:
        """Delete a key. Missing keys are not an error."""
        ...
