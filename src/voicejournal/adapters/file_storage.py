"""File-based key-value storage adapter."""

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path

from voicejournal.ports.key_value import StorageError, StorageUnavailableError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileKeyValueStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. Each key gets a JSON file in the
    data directory. Writes go to a temp file that replaces the target, so
    a value is either fully written or left untouched.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    def _ensure_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot use data directory {self.data_dir}: {e}") from e

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        if not _KEY_PATTERN.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> str | None:
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def _write(self, key: str, value: str) -> None:
        path = self._path_for_key(key)
        self._ensure_dir()
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {len(value)} chars to {path}")

    def _remove(self, key: str) -> None:
        path = self._path_for_key(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e

    async def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        await asyncio.to_thread(self._write, key, value)

    async def remove(self, key: str) -> None:
        """Delete a key. Missing keys are not an error."""
        await asyncio.to_thread(self._remove, key)

    def keys(self) -> list[str]:
        """List stored keys."""
        if not self.data_dir.exists():
            return []
        return sorted(p.stem for p in self.data_dir.glob("*.json") if not p.name.startswith("."))
