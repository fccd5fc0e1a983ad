"""Functional core - pure business logic with no I/O."""

from .entries import (
    Analysis,
    DeviceType,
    Echo,
    EchoType,
    JournalEntry,
    KeyMoments,
    mood_color,
    new_entry_id,
)
from .profile import ONBOARDING_GOALS, OnboardingGoal, UserProfile, find_goal
from .schema import SchemaError, decode_entries, decode_profile, encode_entries, encode_profile
from .streaks import filter_today, streak_days
from .windows import ReflectionWindow, available_window, completed_windows, window_for

__all__ = [
    # Entries
    "Analysis",
    "DeviceType",
    "Echo",
    "EchoType",
    "JournalEntry",
    "KeyMoments",
    "mood_color",
    "new_entry_id",
    # Profile
    "ONBOARDING_GOALS",
    "OnboardingGoal",
    "UserProfile",
    "find_goal",
    # Schema
    "SchemaError",
    "decode_entries",
    "decode_profile",
    "encode_entries",
    "encode_profile",
    # Streaks
    "filter_today",
    "streak_days",
    # Windows
    "ReflectionWindow",
    "available_window",
    "completed_windows",
    "window_for",
]
