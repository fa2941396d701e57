"""Shared test fixtures and configuration."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("MAGIC_CALENDAR_ENV", "test")
os.environ.setdefault("MAGIC_CALENDAR_LOG_LEVEL", "WARNING")

from magic_calendar.config import Settings
from magic_calendar.logging_config import setup_logging
from magic_calendar.modules.calendar import CalendarStore


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    """Keep log output quiet during the test run."""
    setup_logging(Settings(magic_calendar_env="test", magic_calendar_log_level="WARNING", _env_file=None))


@pytest.fixture
def settings() -> Settings:
    """Return test settings with the default scheduling rules."""
    return Settings(
        magic_calendar_env="test",
        magic_calendar_log_level="WARNING",
        magic_calendar_max_meetings=5,
        _env_file=None,
    )


@pytest.fixture
def store(settings: Settings) -> CalendarStore:
    """Provide a fresh, empty calendar store."""
    return CalendarStore(settings)


@pytest.fixture
def full_store(store: CalendarStore) -> CalendarStore:
    """Store where alice already holds five WORK meetings."""
    for time in ("08:00", "10:00", "12:00", "14:00", "16:00"):
        assert store.schedule_meeting("alice", time, "WORK") is True
    return store
