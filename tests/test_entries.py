"""Tests for the journal entry model."""

import pytest

from voicejournal.core.entries import (
    Analysis,
    DeviceType,
    Echo,
    EchoType,
    JournalEntry,
    KeyMoments,
    MAX_TIMESTAMP_MS,
    MOOD_COLORS,
    mood_color,
    new_entry_id,
)


class TestJournalEntry:
    def test_rejects_empty_transcript(self, analysis):
        with pytest.raises(ValueError, match="transcript"):
            JournalEntry(id="1", timestamp=0, transcript="   ", analysis=analysis)

    def test_rejects_negative_duration(self, analysis):
        with pytest.raises(ValueError, match="duration"):
            JournalEntry(id="1", timestamp=0, transcript="hi", analysis=analysis, duration_seconds=-1)

    def test_rejects_empty_id(self, analysis):
        with pytest.raises(ValueError, match="id"):
            JournalEntry(id="", timestamp=0, transcript="hi", analysis=analysis)

    def test_is_immutable(self, analysis):
        entry = JournalEntry(id="1", timestamp=1000, transcript="hi", analysis=analysis)
        with pytest.raises(AttributeError):
            entry.timestamp = 2000

    def test_defaults(self, analysis):
        entry = JournalEntry(id="1", timestamp=1000, transcript="hi", analysis=analysis)
        assert entry.device_type is DeviceType.MOBILE
        assert entry.audio_file_id is None
        assert entry.audio_url is None
        assert entry.echo is None

    def test_to_dict_uses_persisted_names(self, analysis):
        entry = JournalEntry(
            id="abc",
            timestamp=1736985600000,
            transcript="Good day",
            analysis=analysis,
            duration_seconds=30,
            echo=Echo(text="You mentioned rest again", type=EchoType.THEME),
        )

        data = entry.to_dict()

        assert data["durationSeconds"] == 30
        assert data["deviceType"] == "mobile"
        assert data["audioFileId"] is None
        assert data["analysis"]["keyMoments"]["wins"] == ["Shipped it"]
        assert data["echo"] == {"text": "You mentioned rest again", "type": "theme"}

    def test_to_dict_omits_missing_echo(self, analysis):
        entry = JournalEntry(id="abc", timestamp=1, transcript="x", analysis=analysis)
        assert "echo" not in entry.to_dict()

    def test_from_dict_restores_equal_entry(self, analysis):
        entry = JournalEntry(
            id="abc",
            timestamp=1736985600000,
            transcript="Good day",
            analysis=analysis,
            duration_seconds=30,
            audio_url="file:///tmp/a.m4a",
            echo=Echo(text="Same time as yesterday", type=EchoType.TIME),
        )
        assert JournalEntry.from_dict(entry.to_dict()) == entry

    def test_from_dict_accepts_first_release_shape(self):
        """Old entries have no reflection text and no echo."""
        data = {
            "id": "1736985600000",
            "timestamp": 1736985600000,
            "transcript": "Today was a good day.",
            "audioFileId": None,
            "audioUrl": None,
            "durationSeconds": 12,
            "deviceType": "mobile",
            "analysis": {
                "mood": "Grateful",
                "themes": ["gratitude"],
                "emoji": "🙏",
                "color": "#FB923C",
                "keyMoments": {"wins": [], "worries": [], "goals": []},
            },
        }

        entry = JournalEntry.from_dict(data)

        assert entry.analysis.reflection == ""
        assert entry.analysis.mood == "Grateful"
        assert entry.duration_seconds == 12

    def test_from_dict_missing_analysis(self):
        with pytest.raises(KeyError):
            JournalEntry.from_dict({"id": "1", "timestamp": 1, "transcript": "x"})

    def test_from_dict_unknown_device(self, analysis):
        data = JournalEntry(id="1", timestamp=1, transcript="x", analysis=analysis).to_dict()
        data["deviceType"] = "watch"
        with pytest.raises(ValueError):
            JournalEntry.from_dict(data)

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            JournalEntry.from_dict(["not", "an", "entry"])

    def test_rejects_timestamp_past_year_9999(self, analysis):
        with pytest.raises(ValueError, match="timestamp"):
            JournalEntry(id="1", timestamp=100000000000000000, transcript="hi", analysis=analysis)

    def test_accepts_latest_timestamp(self, analysis):
        entry = JournalEntry(id="1", timestamp=MAX_TIMESTAMP_MS, transcript="hi", analysis=analysis)
        assert entry.timestamp == MAX_TIMESTAMP_MS

    def test_from_dict_rejects_infinite_timestamp(self, analysis):
        data = JournalEntry(id="1", timestamp=1, transcript="x", analysis=analysis).to_dict()
        data["timestamp"] = float("inf")
        with pytest.raises(ValueError, match="timestamp must be finite"):
            JournalEntry.from_dict(data)

    def test_from_dict_rejects_string_timestamp(self, analysis):
        data = JournalEntry(id="1", timestamp=1, transcript="x", analysis=analysis).to_dict()
        data["timestamp"] = "1000"
        with pytest.raises(ValueError, match="timestamp must be a number"):
            JournalEntry.from_dict(data)

    def test_from_dict_rejects_infinite_duration(self, analysis):
        data = JournalEntry(id="1", timestamp=1, transcript="x", analysis=analysis).to_dict()
        data["durationSeconds"] = float("inf")
        with pytest.raises(ValueError, match="durationSeconds"):
            JournalEntry.from_dict(data)

    def test_from_dict_truncates_float_timestamp(self, analysis):
        data = JournalEntry(id="1", timestamp=1, transcript="x", analysis=analysis).to_dict()
        data["timestamp"] = 1736985600000.0
        assert JournalEntry.from_dict(data).timestamp == 1736985600000


class TestAnalysis:
    def test_themes_must_be_list(self):
        with pytest.raises(ValueError):
            Analysis.from_dict({"mood": "Calm", "themes": "work"})

    def test_missing_key_moments(self):
        analysis = Analysis.from_dict({"mood": "Calm"})
        assert analysis.key_moments == KeyMoments()

    def test_key_moments_list_rejected(self):
        with pytest.raises(ValueError, match="keyMoments"):
            Analysis.from_dict({"mood": "Calm", "keyMoments": ["a"]})

    def test_analysis_must_be_object(self):
        with pytest.raises(ValueError, match="analysis"):
            Analysis.from_dict(["Calm"])

    def test_echo_must_be_object(self):
        with pytest.raises(ValueError, match="echo"):
            Echo.from_dict("see last week")


class TestMoodColor:
    def test_known_mood(self):
        assert mood_color("Grateful") == MOOD_COLORS["grateful"]

    def test_unknown_mood_falls_back(self):
        assert mood_color("Bewildered") == MOOD_COLORS["reflective"]


def test_new_entry_ids_are_unique():
    ids = {new_entry_id() for _ in range(1000)}
    assert len(ids) == 1000
