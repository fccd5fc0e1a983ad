"""Shared test helpers."""

from datetime import datetime
from zoneinfo import ZoneInfo

from voicejournal.adapters.memory_storage import MemoryKeyValueStore
from voicejournal.ports.key_value import StorageError, StorageUnavailableError

TZ = ZoneInfo("America/Toronto")


def ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class FlakyStore(MemoryKeyValueStore):
    """Memory store whose reads and writes can be made to fail."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.unavailable = False
        self.writes = 0

    def _check(self, failing: bool) -> None:
        if self.unavailable:
            raise StorageUnavailableError("disk gone")
        if failing:
            raise StorageError("write refused")

    async def get(self, key):
        self._check(self.fail_reads)
        return await super().get(key)

    async def set(self, key, value):
        self._check(self.fail_writes)
        self.writes += 1
        await super().set(key, value)

    async def remove(self, key):
        self._check(self.fail_writes)
        await super().remove(key)
