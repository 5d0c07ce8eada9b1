from datetime import timedelta

import pytest
from pydantic import ValidationError

from biathlonsim.errors import FormatError
from biathlonsim.models import Event, EventKind, RaceConfig

from conftest import at, ev, make_config


class TestRaceConfig:
    def test_from_mapping_parses_file_layout(self):
        config = RaceConfig.from_mapping({
            "laps": 2,
            "lapLen": 3500,
            "penaltyLen": 150,
            "firingLines": 2,
            "start": "10:00:00.000",
            "startDelta": "00:01:30",
        })
        assert config.laps == 2
        assert config.lap_len == 3500
        assert config.penalty_len == 150
        assert config.firing_lines == 2
        assert config.start == at(10, 0)
        assert config.start_delta == timedelta(seconds=90)

    def test_malformed_start_delta_raises_format_error(self):
        with pytest.raises(FormatError):
            RaceConfig.from_mapping({
                "laps": 1, "lapLen": 1000, "penaltyLen": 100, "firingLines": 1,
                "start": "10:00:00", "startDelta": "00:30",
            })

    def test_malformed_start_raises_format_error(self):
        with pytest.raises(FormatError):
            RaceConfig.from_mapping({
                "laps": 1, "lapLen": 1000, "penaltyLen": 100, "firingLines": 1,
                "start": "invalid-time", "startDelta": "00:00:30",
            })

    def test_rejects_non_positive_lap_count(self):
        with pytest.raises(ValidationError):
            make_config(laps=0)

    def test_is_frozen(self, config):
        with pytest.raises(ValidationError):
            config.laps = 3

    def test_describe(self, config):
        assert config.describe() == (
            "1 laps x 1000m, penalty loop 100m, 1 firing line(s), "
            "start 10:00:00.000 every 00:01:00.000"
        )


class TestEvent:
    def test_payload_is_required_for_kind(self):
        with pytest.raises(ValidationError):
            Event(timestamp=at(9, 0), kind=EventKind.TARGET_HIT, competitor_id=1)
        with pytest.raises(ValidationError):
            Event(timestamp=at(9, 0), kind=EventKind.START_TIME_ASSIGNED, competitor_id=1)

    def test_disqualified_comment_is_optional(self):
        event = ev(EventKind.DISQUALIFIED, 4, at(9, 0))
        assert event.comment is None

    @pytest.mark.parametrize("event, expected", [
        (ev(EventKind.REGISTERED, 1, at(9, 5, 59, 867)),
         "[09:05:59.867] The competitor(1) registered"),
        (ev(EventKind.START_TIME_ASSIGNED, 1, at(9, 15, 0, 841), scheduled_start=at(9, 30)),
         "[09:15:00.841] The start time for the competitor(1) was set by a draw to 09:30:00.000"),
        (ev(EventKind.ON_START_LINE, 1, at(9, 29, 45)),
         "[09:29:45.000] The competitor(1) is on the start line"),
        (ev(EventKind.STARTED, 1, at(9, 30, 1, 5)),
         "[09:30:01.005] The competitor(1) has started"),
        (ev(EventKind.ON_FIRING_RANGE, 1, at(9, 49, 31, 659), firing_range=1),
         "[09:49:31.659] The competitor(1) is on the firing range(1)"),
        (ev(EventKind.TARGET_HIT, 1, at(9, 49, 33, 123), target=2),
         "[09:49:33.123] The target(2) has been hit by competitor(1)"),
        (ev(EventKind.LEFT_FIRING_RANGE, 1, at(9, 49, 38, 339)),
         "[09:49:38.339] The competitor(1) left the firing range"),
        (ev(EventKind.ENTERED_PENALTY_LOOP, 1, at(9, 49, 55, 915)),
         "[09:49:55.915] The competitor(1) entered the penalty laps"),
        (ev(EventKind.LEFT_PENALTY_LOOP, 1, at(9, 51, 48, 391)),
         "[09:51:48.391] The competitor(1) left the penalty laps"),
        (ev(EventKind.LAP_COMPLETED, 1, at(9, 59, 3, 872)),
         "[09:59:03.872] The competitor(1) ended the main lap"),
        (ev(EventKind.CANNOT_CONTINUE, 1, at(9, 59, 5, 321), comment="Lost in the forest"),
         "[09:59:05.321] The competitor(1) can't continue: Lost in the forest"),
        (ev(EventKind.DISQUALIFIED, 2, at(10, 0)),
         "[10:00:00.000] The competitor(2) is disqualified"),
        (ev(EventKind.FINISHED, 2, at(10, 0)),
         "[10:00:00.000] The competitor(2) has finished"),
    ])
    def test_narrate(self, event, expected):
        assert event.narrate() == expected
