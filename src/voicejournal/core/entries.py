"""Pure journal entry domain model - no I/O dependencies."""

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum


class DeviceType(Enum):
    """Capture device class."""

    MOBILE = "mobile"


class EchoType(Enum):
    """What an echo hint refers back to."""

    THEME = "theme"
    MOOD = "mood"
    TIME = "time"


MOOD_COLORS = {
    "happy": "#FCD34D",
    "calm": "#818CF8",
    "sad": "#93C5FD",
    "anxious": "#FDA4AF",
    "grateful": "#FB923C",
    "reflective": "#C4B5FD",
}


def mood_color(mood: str) -> str:
    """Display color for a mood label, reflective color if unknown."""
    return MOOD_COLORS.get(mood.strip().lower(), MOOD_COLORS["reflective"])


def new_entry_id() -> str:
    """Generate a collision-resistant entry id."""
    return uuid.uuid4().hex


# 9999-01-01T00:00:00Z, leaving room for any local offset
MAX_TIMESTAMP_MS = 253370764800000


def _mapping(value, name: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object, got {type(value).__name__}")
    return value


def _whole_number(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return int(value)


def _str_list(value) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Expected a list, got {type(value).__name__}")
    return [str(v) for v in value]


@dataclass(frozen=True)
class KeyMoments:
    """Highlights pulled out of a reflection."""

    wins: list[str] = field(default_factory=list)
    worries: list[str] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "wins": list(self.wins),
            "worries": list(self.worries),
            "goals": list(self.goals),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "KeyMoments":
        data = _mapping(data, "keyMoments")
        return cls(
            wins=_str_list(data.get("wins")),
            worries=_str_list(data.get("worries")),
            goals=_str_list(data.get("goals")),
        )


@dataclass(frozen=True)
class Analysis:
    """Structured analysis of a transcript."""

    mood: str
    themes: list[str] = field(default_factory=list)
    emoji: str = ""
    color: str = ""
    reflection: str = ""
    key_moments: KeyMoments = field(default_factory=KeyMoments)

    def to_dict(self) -> dict:
        return {
            "mood": self.mood,
            "themes": list(self.themes),
            "emoji": self.emoji,
            "color": self.color,
            "reflection": self.reflection,
            "keyMoments": self.key_moments.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Analysis":
        # Entries written by the first app release carry no reflection text
        data = _mapping(data, "analysis")
        return cls(
            mood=str(data["mood"]),
            themes=_str_list(data.get("themes")),
            emoji=data.get("emoji", "") or "",
            color=data.get("color", "") or "",
            reflection=data.get("reflection", "") or "",
            key_moments=KeyMoments.from_dict(data.get("keyMoments") or {}),
        )


@dataclass(frozen=True)
class Echo:
    """A short display hint that links an entry to earlier ones."""

    text: str
    type: EchoType

    def to_dict(self) -> dict:
        return {"text": self.text, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Echo":
        data = _mapping(data, "echo")
        return cls(text=str(data["text"]), type=EchoType(data["type"]))


@dataclass(frozen=True)
class JournalEntry:
    """
    One recorded reflection.

    Entries are immutable: the store only ever adds or deletes them.
    """

    id: str
    timestamp: int
    transcript: str
    analysis: Analysis
    duration_seconds: int = 0
    audio_file_id: str | None = None
    audio_url: str | None = None
    device_type: DeviceType = DeviceType.MOBILE
    echo: Echo | None = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Entry id must not be empty")
        if not isinstance(self.transcript, str) or not self.transcript.strip():
            raise ValueError("Entry transcript must not be empty")
        if not 0 <= self.timestamp <= MAX_TIMESTAMP_MS:
            raise ValueError(f"Invalid timestamp: {self.timestamp}")
        if self.duration_seconds < 0:
            raise ValueError(f"Invalid duration: {self.duration_seconds}")

    def to_dict(self) -> dict:
        """Serialize with the persisted (camelCase) field names."""
        data = {
            "id": self.id,
            "timestamp": self.timestamp,
            "transcript": self.transcript,
            "audioFileId": self.audio_file_id,
            "audioUrl": self.audio_url,
            "durationSeconds": self.duration_seconds,
            "deviceType": self.device_type.value,
            "analysis": self.analysis.to_dict(),
        }
        if self.echo is not None:
            data["echo"] = self.echo.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        """Create JournalEntry from a persisted document.

        Raises KeyError or ValueError on malformed input.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        echo = data.get("echo")
        return cls(
            id=str(data["id"]),
            timestamp=_whole_number(data["timestamp"], "timestamp"),
            transcript=data["transcript"],
            analysis=Analysis.from_dict(data["analysis"]),
            duration_seconds=_whole_number(data.get("durationSeconds") or 0, "durationSeconds"),
            audio_file_id=data.get("audioFileId"),
            audio_url=data.get("audioUrl"),
            device_type=DeviceType(data.get("deviceType", DeviceType.MOBILE.value)),
            echo=Echo.from_dict(echo) if echo else None,
        )
