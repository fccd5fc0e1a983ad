"""Shared workflow layer between the CLI and other front ends.

Each open_* function builds a store from config and loads it before
handing it back.
"""

from dataclasses import dataclass
from datetime import datetime

from .adapters.file_storage import FileKeyValueStore
from .adapters.mock_analyzer import MockAnalyzer
from .adapters.mock_auth import MockAuthenticator
from .capture import CaptureResult, record_reflection
from .config import Config
from .core.entries import JournalEntry
from .core.windows import ReflectionWindow
from .journal_store import JournalStore
from .ports.analyzer import Analyzer
from .ports.authenticator import Authenticator
from .ports.key_value import KeyValueStore
from .profile_store import ProfileStore


def get_storage(config: Config) -> FileKeyValueStore:
    """Resolve the storage directory from config."""
    return FileKeyValueStore(config.resolved_data_dir())


async def open_journal(config: Config, storage: KeyValueStore | None = None) -> JournalStore:
    """Build and load the journal store."""
    journal = JournalStore(
        storage or get_storage(config),
        tz=config.tzinfo(),
        cutoff_hour=config.morning_cutoff_hour,
    )
    await journal.load()
    return journal


async def open_profile(
    config: Config,
    storage: KeyValueStore | None = None,
    authenticator: Authenticator | None = None,
) -> ProfileStore:
    """Build and load the profile store."""
    profile = ProfileStore(storage or get_storage(config), authenticator or MockAuthenticator())
    await profile.load()
    return profile


async def record(
    config: Config,
    capture: CaptureResult,
    storage: KeyValueStore | None = None,
    analyzer: Analyzer | None = None,
    now: datetime | None = None,
) -> JournalEntry | None:
    """Analyze and save a finished recording."""
    journal = await open_journal(config, storage)
    return await record_reflection(journal, capture, analyzer or MockAnalyzer(), now)


@dataclass
class Status:
    """Home-screen summary."""

    first_name: str
    streak: int
    today_count: int
    completed: set[ReflectionWindow]
    available: ReflectionWindow | None
    recent: list[JournalEntry]
    needs_onboarding: bool


def build_status(
    journal: JournalStore,
    profile: ProfileStore,
    now: datetime | None = None,
) -> Status:
    """Summarize today's progress for display."""
    user = profile.user
    return Status(
        first_name=(user.first_name if user else "") or "friend",
        streak=journal.get_streak_days(now),
        today_count=len(journal.get_today_entries(now)),
        completed=journal.get_completed_windows(now),
        available=journal.get_available_window(now),
        recent=journal.get_recent_entries(3),
        needs_onboarding=profile.needs_onboarding,
    )
