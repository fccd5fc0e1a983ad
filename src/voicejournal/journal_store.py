"""Journal entry store.

Owns the ordered entry collection (most recent insertion first), keeps it
in sync with a KeyValueStore, and answers the derived habit-tracking
queries. Lifecycle: UNINITIALIZED -> LOADING -> READY.
"""

import asyncio
import logging
from datetime import datetime, tzinfo
from enum import Enum
from typing import Callable

from .core.entries import JournalEntry
from .core.schema import SchemaError, decode_entries, encode_entries
from .core.streaks import filter_today, recent, streak_days
from .core.windows import DEFAULT_CUTOFF_HOUR, ReflectionWindow, available_window, completed_windows
from .ports.key_value import KeyValueStore, StorageError, StorageUnavailableError
from .subscriptions import Subscribers

logger = logging.getLogger(__name__)

ENTRIES_KEY = "journal_entries"


class StoreState(Enum):
    """Store readiness."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class DuplicateEntryError(ValueError):
    """Raised when adding an entry whose id is already in the store."""

    pass


class JournalStore:
    """
    Journal entries backed by a KeyValueStore.

    Mutations persist the whole collection first and only then replace the
    in-memory state, so a failed write never leaves the two out of sync.
    Writes are serialized by a per-store lock.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = ENTRIES_KEY,
        tz: tzinfo | None = None,
        cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    ):
        self.storage = storage
        self.key = key
        self.tz = tz
        self.cutoff_hour = cutoff_hour
        self._entries: tuple[JournalEntry, ...] = ()
        self._state = StoreState.UNINITIALIZED
        self._ready = asyncio.Event()
        self._write_lock = asyncio.Lock()
        self._subscribers: Subscribers[tuple[JournalEntry, ...]] = Subscribers()

    # ============== Lifecycle ==============

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is StoreState.LOADING

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    async def wait_ready(self) -> None:
        """Block until the first load has finished."""
        await self._ready.wait()

    async def load(self) -> None:
        """
        Read the persisted collection.

        Missing or unreadable data leaves the store empty. Only
        StorageUnavailableError propagates.
        """
        async with self._write_lock:
            self._state = StoreState.LOADING
            try:
                raw = await self.storage.get(self.key)
            except StorageUnavailableError:
                self._state = StoreState.UNINITIALIZED
                raise
            except StorageError as e:
                logger.warning(f"Error loading entries: {e}")
                raw = None

            entries: list[JournalEntry] = []
            if raw:
                try:
                    entries = decode_entries(raw)
                except SchemaError as e:
                    logger.warning(f"Discarding unreadable entries document: {e}")

            self._entries = _unique(entries)
            self._state = StoreState.READY
            self._ready.set()
            logger.debug(f"Loaded {len(self._entries)} journal entries")

        self._subscribers.notify(self._entries)

    def _require_ready(self) -> None:
        if self._state is not StoreState.READY:
            raise RuntimeError("Journal store is not loaded. Call load() first.")

    async def _save(self, new_entries: tuple[JournalEntry, ...]) -> bool:
        try:
            await self.storage.set(self.key, encode_entries(list(new_entries)))
        except StorageUnavailableError:
            raise
        except StorageError as e:
            logger.error(f"Error saving entries: {e}")
            return False
        self._entries = new_entries
        return True

    # ============== Mutations ==============

    async def add_entry(self, entry: JournalEntry) -> bool:
        """
        Insert an entry at the head of the collection and persist.

        Returns False if the write failed; the store is then unchanged.
        """
        async with self._write_lock:
            self._require_ready()
            if any(e.id == entry.id for e in self._entries):
                raise DuplicateEntryError(f"Entry {entry.id} already exists")
            saved = await self._save((entry, *self._entries))
        if saved:
            self._subscribers.notify(self._entries)
        return saved

    async def delete_entry(self, entry_id: str) -> bool:
        """
        Remove the entry with the given id and persist.

        Deleting an unknown id is a no-op. Returns False if the write failed.
        """
        async with self._write_lock:
            self._require_ready()
            remaining = tuple(e for e in self._entries if e.id != entry_id)
            if len(remaining) == len(self._entries):
                return True
            saved = await self._save(remaining)
        if saved:
            self._subscribers.notify(self._entries)
        return saved

    # ============== Queries ==============

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """Snapshot of all entries, most recent insertion first."""
        return self._entries

    def subscribe(self, callback: Callable[[tuple[JournalEntry, ...]], None]) -> Callable[[], None]:
        """Call `callback` with the new entries after every change."""
        return self._subscribers.add(callback)

    def get_entry_by_id(self, entry_id: str) -> JournalEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_today_entries(self, now: datetime | None = None) -> list[JournalEntry]:
        """Entries recorded on the current local calendar day."""
        return filter_today(self._entries, now, self.tz)

    def get_streak_days(self, now: datetime | None = None) -> int:
        """Consecutive days with at least one entry, ending today."""
        return streak_days(self._entries, now, self.tz)

    def get_recent_entries(self, limit: int = 3) -> list[JournalEntry]:
        return recent(self._entries, limit)

    def get_completed_windows(self, now: datetime | None = None) -> set[ReflectionWindow]:
        return completed_windows(self._entries, now, self.tz, self.cutoff_hour)

    def get_available_window(self, now: datetime | None = None) -> ReflectionWindow | None:
        return available_window(self._entries, now, self.tz, self.cutoff_hour)


def _unique(entries: list[JournalEntry]) -> tuple[JournalEntry, ...]:
    """Drop repeated ids, keeping the first (most recent) occurrence."""
    seen = set()
    unique = []
    for entry in entries:
        if entry.id in seen:
            logger.warning(f"Dropping duplicate journal entry {entry.id}")
            continue
        seen.add(entry.id)
        unique.append(entry)
    return tuple(unique)
