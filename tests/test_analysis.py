from datetime import timedelta

import pytest

from biathlonsim.analysis import build_lap_frame, summarize_field, summarize_laps
from biathlonsim.models import EventKind
from biathlonsim.simulation import RaceReplay

from conftest import at, ev


@pytest.fixture
def competitors(two_lap_config):
    events = [
        ev(EventKind.STARTED, 1, at(10, 0)),
        ev(EventKind.ON_FIRING_RANGE, 1, at(10, 5), firing_range=1),
        ev(EventKind.TARGET_HIT, 1, at(10, 5, 1), target=1),
        ev(EventKind.TARGET_HIT, 1, at(10, 5, 2), target=2),
        ev(EventKind.LEFT_FIRING_RANGE, 1, at(10, 5, 30)),
        ev(EventKind.LAP_COMPLETED, 1, at(10, 10)),
        ev(EventKind.LAP_COMPLETED, 1, at(10, 20)),
        ev(EventKind.STARTED, 2, at(10, 0)),
        ev(EventKind.LAP_COMPLETED, 2, at(10, 8)),
        ev(EventKind.CANNOT_CONTINUE, 2, at(10, 9), comment="Injured"),
        ev(EventKind.REGISTERED, 3, at(9, 0)),
    ]
    return RaceReplay(two_lap_config).run(events).competitors


def test_build_lap_frame(competitors):
    frame = build_lap_frame(competitors)

    assert len(frame) == 3
    lap = frame[(frame["competitor_id"] == 1) & (frame["lap"] == 1)].iloc[0]
    assert lap["duration_s"] == 600
    assert lap["speed"] == pytest.approx(3500 / 600)
    assert lap["hits"] == 2
    assert lap["shots"] == 5


def test_summarize_laps(competitors):
    summary = summarize_laps(build_lap_frame(competitors))

    assert list(summary.index) == [1, 2]
    assert summary.loc[1, "count"] == 2
    assert summary.loc[1, "fastest_s"] == 480
    assert summary.loc[1, "mean_duration_s"] == 540
    assert summary.loc[1, "best_speed"] == pytest.approx(3500 / 480)


def test_summarize_laps_empty_frame():
    assert summarize_laps(build_lap_frame({})).empty


def test_summarize_field(competitors):
    summary = summarize_field(competitors)

    assert summary.competitors == 3
    assert summary.finishers == 1
    assert summary.fastest_lap == (1, 2, timedelta(minutes=8))
    assert summary.shooting_accuracy == pytest.approx(40.0)
