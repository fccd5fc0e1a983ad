"""Shared fixtures."""

from datetime import datetime

import pytest

from voicejournal.core.entries import Analysis, JournalEntry, KeyMoments

from helpers import TZ, FlakyStore, ms


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 21, 0, tzinfo=TZ)


@pytest.fixture
def analysis():
    return Analysis(
        mood="Calm",
        themes=["work", "rest"],
        emoji="😌",
        color="#818CF8",
        reflection="A steady day.",
        key_moments=KeyMoments(wins=["Shipped it"], worries=["Sleep"], goals=["Walk more"]),
    )


@pytest.fixture
def make_entry(analysis):
    """Factory for creating entries at a given local time."""
    counter = iter(range(1, 10_000))

    def _make(moment: datetime, entry_id: str | None = None, transcript: str = "Thinking out loud") -> JournalEntry:
        return JournalEntry(
            id=entry_id or f"e{next(counter)}",
            timestamp=ms(moment),
            transcript=transcript,
            analysis=analysis,
            duration_seconds=42,
        )

    return _make


@pytest.fixture
def storage():
    return FlakyStore()
