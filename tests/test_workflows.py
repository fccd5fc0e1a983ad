"""Tests for the shared workflow layer."""

import asyncio
from datetime import datetime
from pathlib import Path

import pytest

from voicejournal.adapters.memory_storage import MemoryKeyValueStore
from voicejournal.capture import CaptureResult
from voicejournal.config import DATA_DIR, Config
from voicejournal.core.windows import ReflectionWindow
from voicejournal.workflows import build_status, get_storage, open_journal, open_profile, record

from helpers import TZ


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=str(tmp_path), timezone="America/Toronto")


class TestGetStorage:
    def test_uses_configured_dir(self, tmp_path):
        config = Config(data_dir=str(tmp_path))
        assert get_storage(config).data_dir == tmp_path

    def test_expands_user_path(self):
        config = Config(data_dir="~/some/journal")
        storage = get_storage(config)
        assert "~" not in str(storage.data_dir)
        assert storage.data_dir == Path.home() / "some" / "journal"

    def test_falls_back_to_default(self):
        assert get_storage(Config(data_dir="")).data_dir == DATA_DIR


class TestOpenJournal:
    def test_loaded_with_config_zone(self, config):
        journal = asyncio.run(open_journal(config))
        assert journal.is_ready
        assert journal.tz == TZ
        assert journal.cutoff_hour == 14

    def test_custom_cutoff(self, tmp_path):
        config = Config(data_dir=str(tmp_path), morning_cutoff_hour=11)
        assert asyncio.run(open_journal(config)).cutoff_hour == 11


class TestRecord:
    def test_saves_to_configured_dir(self, config, tmp_path):
        now = datetime(2025, 1, 15, 9, 0, tzinfo=TZ)
        entry = asyncio.run(record(config, CaptureResult("Morning pages", 60), now=now))

        assert entry is not None
        assert (tmp_path / "journal_entries.json").exists()
        journal = asyncio.run(open_journal(config))
        assert journal.get_entry_by_id(entry.id) == entry


class TestBuildStatus:
    def test_summary(self, make_entry):
        storage = MemoryKeyValueStore()
        now = datetime(2025, 1, 15, 16, 0, tzinfo=TZ)

        async def scenario():
            config = Config(timezone="America/Toronto")
            journal = await open_journal(config, storage)
            profile = await open_profile(config, storage)
            await profile.sign_up("sam@example.com", "pw")
            await profile.update_user(first_name="Sam")
            await journal.add_entry(make_entry(datetime(2025, 1, 14, 20, 0, tzinfo=TZ)))
            await journal.add_entry(make_entry(datetime(2025, 1, 15, 8, 0, tzinfo=TZ)))
            return build_status(journal, profile, now)

        status = asyncio.run(scenario())

        assert status.first_name == "Sam"
        assert status.streak == 2
        assert status.today_count == 1
        assert status.completed == {ReflectionWindow.MORNING}
        assert status.available is ReflectionWindow.EVENING
        assert len(status.recent) == 2
        assert status.needs_onboarding is True

    def test_signed_out_greeting(self):
        storage = MemoryKeyValueStore()

        async def scenario():
            config = Config()
            return build_status(await open_journal(config, storage), await open_profile(config, storage))

        status = asyncio.run(scenario())
        assert status.first_name == "friend"
        assert status.streak == 0
        assert status.needs_onboarding is False
