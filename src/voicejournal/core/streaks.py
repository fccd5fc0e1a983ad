"""Pure streak and day-window logic - no I/O dependencies.

All day boundaries are local calendar days in the given time zone.
``tz=None`` means the process's local time zone.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from .entries import JournalEntry


def local_datetime(timestamp_ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to a local datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz)


def local_date(timestamp_ms: int, tz: tzinfo | None = None) -> date:
    """The local calendar day a timestamp falls on."""
    return local_datetime(timestamp_ms, tz).date()


def resolve_now(now: datetime | None = None, tz: tzinfo | None = None) -> datetime:
    """Current local time, or `now` expressed in the given zone."""
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now
    if tz is None:
        return now.astimezone()
    return now.astimezone(tz)


def to_timestamp_ms(moment: datetime) -> int:
    """Epoch milliseconds for a datetime (naive = local time)."""
    return int(moment.timestamp() * 1000)


def entry_days(entries: Iterable[JournalEntry], tz: tzinfo | None = None) -> set[date]:
    """Distinct local days that have at least one entry."""
    return {local_date(e.timestamp, tz) for e in entries}


def filter_today(
    entries: Iterable[JournalEntry],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[JournalEntry]:
    """
    Entries on the same local calendar day as `now`.

    Future-dated entries are kept only when they fall on today.
    Pure function - no I/O.
    """
    today = resolve_now(now, tz).date()
    return [e for e in entries if local_date(e.timestamp, tz) == today]


def streak_days(
    entries: Iterable[JournalEntry],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> int:
    """
    Length of the unbroken run of days with entries, ending today.

    Walks back from today one calendar day at a time and stops at the
    first day without an entry. Days after today never count.
    Pure function - no I/O.
    """
    days = entry_days(entries, tz)
    if not days:
        return 0

    current = resolve_now(now, tz).date()
    streak = 0
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


def recent(entries: Iterable[JournalEntry], limit: int = 3) -> list[JournalEntry]:
    """First `limit` entries in collection order."""
    if limit < 0:
        raise ValueError(f"Invalid limit: {limit}")
    return list(entries)[:limit]
