"""Shared fixtures for the replay tests."""

from datetime import datetime, timedelta

import pytest

from biathlonsim.models import Event, EventKind, RaceConfig
from biathlonsim.timeutils import REFERENCE_DATE


def at(hours: int, minutes: int, seconds: int = 0, millis: int = 0) -> datetime:
    """Timestamp on the reference date."""
    return REFERENCE_DATE.replace(
        hour=hours, minute=minutes, second=seconds, microsecond=millis * 1000
    )


def ev(kind: EventKind, competitor_id: int, timestamp: datetime, **payload) -> Event:
    return Event(timestamp=timestamp, kind=kind, competitor_id=competitor_id, **payload)


def make_config(**overrides) -> RaceConfig:
    values = {
        "laps": 1,
        "lap_len": 1000,
        "penalty_len": 100,
        "firing_lines": 1,
        "start": at(10, 0),
        "start_delta": timedelta(minutes=1),
    }
    values.update(overrides)
    return RaceConfig(**values)


@pytest.fixture
def config() -> RaceConfig:
    return make_config()


@pytest.fixture
def two_lap_config() -> RaceConfig:
    return make_config(laps=2, lap_len=3500, penalty_len=150)
