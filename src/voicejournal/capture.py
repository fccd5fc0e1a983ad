"""Turning a finished recording into a journal entry."""

import logging
from dataclasses import dataclass
from datetime import datetime

from .core.entries import Analysis, DeviceType, JournalEntry, new_entry_id
from .core.streaks import to_timestamp_ms
from .journal_store import JournalStore
from .ports.analyzer import Analyzer

logger = logging.getLogger(__name__)


@dataclass
class CaptureResult:
    """What the recording flow hands over once a recording stops."""

    transcript: str
    duration_seconds: int
    audio_file_id: str | None = None
    audio_url: str | None = None


def build_entry(
    capture: CaptureResult,
    analysis: Analysis,
    now: datetime | None = None,
    entry_id: str | None = None,
) -> JournalEntry:
    """Assemble a new entry stamped with the current time."""
    moment = now or datetime.now()
    return JournalEntry(
        id=entry_id or new_entry_id(),
        timestamp=to_timestamp_ms(moment),
        transcript=capture.transcript.strip(),
        analysis=analysis,
        duration_seconds=capture.duration_seconds,
        audio_file_id=capture.audio_file_id,
        audio_url=capture.audio_url,
        device_type=DeviceType.MOBILE,
    )


async def record_reflection(
    journal: JournalStore,
    capture: CaptureResult,
    analyzer: Analyzer,
    now: datetime | None = None,
) -> JournalEntry | None:
    """
    Analyze a capture, add it to the journal, and return the new entry.

    Returns None if the journal could not persist it.
    """
    analysis = await analyzer.analyze(capture.transcript)
    entry = build_entry(capture, analysis, now)
    if not await journal.add_entry(entry):
        logger.error(f"Failed to save reflection {entry.id}")
        return None
    logger.info(f"Recorded reflection {entry.id} ({capture.duration_seconds}s, mood: {analysis.mood})")
    return entry
