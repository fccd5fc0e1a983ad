"""In-memory key-value storage adapter."""


class MemoryKeyValueStore:
    """
    Process-local key-value storage.

    Implements KeyValueStore protocol. Nothing survives the process; used
    for ephemeral sessions and tests.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        self.data[key] = value

    async def remove(self, key: str) -> None:
        """Delete a key. Missing keys are not an error."""
        self.data.pop(key, None)
