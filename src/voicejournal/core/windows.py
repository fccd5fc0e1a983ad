"""Morning/evening reflection windows - no I/O dependencies."""

from datetime import datetime, tzinfo
from enum import Enum
from typing import Iterable

from .entries import JournalEntry
from .streaks import filter_today, local_datetime, resolve_now

DEFAULT_CUTOFF_HOUR = 14


class ReflectionWindow(Enum):
    """Part of the local day a reflection belongs to."""

    MORNING = "morning"  # 00:00 up to the cutoff hour
    EVENING = "evening"  # cutoff hour until midnight

    def label(self, cutoff_hour: int = DEFAULT_CUTOFF_HOUR) -> str:
        """Human-readable window title with its time range."""
        if self is ReflectionWindow.MORNING:
            return f"Morning Intention (00:00-{cutoff_hour - 1:02d}:59)"
        return f"Evening Reflection ({cutoff_hour:02d}:00-23:59)"


def _check_cutoff(cutoff_hour: int) -> None:
    if not 1 <= cutoff_hour <= 23:
        raise ValueError(f"Cutoff hour must be between 1 and 23, got {cutoff_hour}")


def window_for(moment: datetime, cutoff_hour: int = DEFAULT_CUTOFF_HOUR) -> ReflectionWindow:
    """Classify a local datetime into its reflection window."""
    _check_cutoff(cutoff_hour)
    if moment.hour < cutoff_hour:
        return ReflectionWindow.MORNING
    return ReflectionWindow.EVENING


def completed_windows(
    entries: Iterable[JournalEntry],
    now: datetime | None = None,
    tz: tzinfo | None = None,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
) -> set[ReflectionWindow]:
    """Windows that already have an entry today."""
    return {
        window_for(local_datetime(e.timestamp, tz), cutoff_hour)
        for e in filter_today(entries, now, tz)
    }


def available_window(
    entries: Iterable[JournalEntry],
    now: datetime | None = None,
    tz: tzinfo | None = None,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
) -> ReflectionWindow | None:
    """
    The window that can be recorded right now.

    None when the current window already has an entry today.
    """
    local_now = resolve_now(now, tz)
    current = window_for(local_now, cutoff_hour)
    if current in completed_windows(entries, local_now, tz, cutoff_hour):
        return None
    return current
