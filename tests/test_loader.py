import json
import logging
from datetime import timedelta

import pytest

from biathlonsim.data import EventLineError, load_config, load_events, parse_event_line
from biathlonsim.errors import ConfigError, FormatError
from biathlonsim.models import EventKind

from conftest import at


def write_config(path, **values):
    data = {
        "laps": 2,
        "lapLen": 3500,
        "penaltyLen": 150,
        "firingLines": 2,
        "start": "10:00:00.000",
        "startDelta": "00:01:30",
    }
    data.update(values)
    path.write_text(json.dumps(data))
    return path


class TestLoadConfig:
    def test_valid_config(self, tmp_path):
        config = load_config(write_config(tmp_path / "config.json"))
        assert config.laps == 2
        assert config.lap_len == 3500
        assert config.start == at(10, 0)
        assert config.start_delta == timedelta(seconds=90)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{ "laps": 2, ')
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_field_type(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{ "laps": 2, "lapLen": "not_a_number", "start": "10:00:00", "startDelta": "00:00:30" }')
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_time_format(self, tmp_path):
        with pytest.raises(FormatError):
            load_config(write_config(tmp_path / "config.json", start="invalid-time"))

    def test_duration_missing_field(self, tmp_path):
        with pytest.raises(FormatError):
            load_config(write_config(tmp_path / "config.json", startDelta="00:30"))


class TestParseEventLine:
    def test_simple_event(self):
        event = parse_event_line("[09:05:59.867] 1 1")
        assert event.kind == EventKind.REGISTERED
        assert event.competitor_id == 1
        assert event.timestamp == at(9, 5, 59, 867)

    def test_start_time_payload(self):
        event = parse_event_line("[09:15:00.841] 2 1 09:30:00.000")
        assert event.scheduled_start == at(9, 30)

    def test_integer_payloads(self):
        assert parse_event_line("[09:49:31.659] 5 1 1").firing_range == 1
        assert parse_event_line("[09:49:33.123] 6 1 2").target == 2

    def test_comment_keeps_spaces(self):
        event = parse_event_line("[09:59:05.321] 11 1 Lost in the forest")
        assert event.comment == "Lost in the forest"

    @pytest.mark.parametrize("line", [
        "this is not a valid event",
        "[09:05:59] 1 1",
        "[25:05:59.000] 1 1",
        "[09:05:59.000] 99 1",
        "[09:49:31.659] 5 1 first",
        "[09:15:00.841] 2 1 later",
        "[09:49:31.659] 6 1",
    ])
    def test_malformed_lines(self, line):
        with pytest.raises(EventLineError):
            parse_event_line(line)


def test_load_events_skips_bad_lines(tmp_path, caplog):
    path = tmp_path / "events"
    path.write_text(
        "[09:05:59.867] 1 1\n"
        "\n"
        "this is not a valid event\n"
        "[09:15:00.841] 2 1 09:30:00.000\n"
    )
    with caplog.at_level(logging.WARNING, logger="biathlonsim.data.loader"):
        events = load_events(path)

    assert [e.kind for e in events] == [EventKind.REGISTERED, EventKind.START_TIME_ASSIGNED]
    assert "line 3" in caplog.text


def test_load_events_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_events(tmp_path / "nope")


def test_load_events_replaces_invalid_utf8(tmp_path, caplog):
    path = tmp_path / "events"
    path.write_bytes(
        b"[09:05:59.867] 1 1\n"
        b"[09:06:00.000] 11 1 caf\xe9\n"
        b"[09:15:00.841] 2 1 09:30:00.000\n"
    )
    with caplog.at_level(logging.WARNING, logger="biathlonsim.data.loader"):
        events = load_events(path)

    assert [e.kind for e in events] == [
        EventKind.REGISTERED, EventKind.CANNOT_CONTINUE, EventKind.START_TIME_ASSIGNED,
    ]
    assert events[1].comment == "caf�"
    assert "line 2" in caplog.text


def test_load_config_invalid_utf8(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b'{ "laps": 1, "lapLen": 1000, "start": "10:00:00\xe9" }')
    with pytest.raises(ConfigError):
        load_config(path)
