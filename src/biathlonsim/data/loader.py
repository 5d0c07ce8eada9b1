"""Loading race configuration and event logs from disk."""

import json
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from biathlonsim.errors import ConfigError, FormatError
from biathlonsim.models import Event, EventKind, RaceConfig
from biathlonsim.timeutils import parse_time_of_day

logger = logging.getLogger(__name__)

EVENT_LINE = re.compile(r"^\[(\d{2}:\d{2}:\d{2}\.\d{3})\]\s+(\d+)\s+(\d+)(?:\s+(.*))?$")


class EventLineError(ValueError):
    """An event log line could not be decoded."""


def load_config(path: str | Path) -> RaceConfig:
    """Load the race configuration from a JSON file.

    Args:
        path: Path to the JSON config

    Returns:
        Validated RaceConfig

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON or fails validation
        FormatError: If ``start`` or ``startDelta`` are malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"config file '{path}' is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"failed to read config file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse config JSON from '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config file '{path}' must contain a JSON object")

    try:
        return RaceConfig.from_mapping(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config in '{path}': {e}") from e


def parse_event_line(line: str) -> Event:
    """Decode one event log line.

    The format is ``[HH:MM:SS.mmm] eventId competitorId [extra params]``.

    Raises:
        EventLineError: If the line is malformed or its payload cannot be parsed
    """
    match = EVENT_LINE.match(line.strip())
    if match is None:
        raise EventLineError("malformed event line")

    timestamp_str, kind_str, competitor_str, extra = match.groups()
    extra = (extra or "").strip()

    try:
        timestamp = parse_time_of_day(timestamp_str)
    except FormatError as e:
        raise EventLineError(f"bad timestamp: {e}") from e

    try:
        kind = EventKind(int(kind_str))
    except ValueError as e:
        raise EventLineError(f"unknown event id {kind_str}") from e

    payload: dict = {}
    try:
        if kind == EventKind.START_TIME_ASSIGNED:
            payload["scheduled_start"] = parse_time_of_day(extra)
        elif kind == EventKind.ON_FIRING_RANGE:
            payload["firing_range"] = int(extra)
        elif kind == EventKind.TARGET_HIT:
            payload["target"] = int(extra)
        elif kind == EventKind.CANNOT_CONTINUE:
            payload["comment"] = extra
        elif kind == EventKind.DISQUALIFIED and extra:
            payload["comment"] = extra
    except ValueError as e:
        raise EventLineError(f"bad parameters for {kind.name} event: '{extra}'") from e

    try:
        return Event(
            timestamp=timestamp,
            kind=kind,
            competitor_id=int(competitor_str),
            **payload,
        )
    except ValidationError as e:
        raise EventLineError(str(e)) from e


def parse_events(lines: list[str]) -> list[Event]:
    """Decode event log lines, skipping blank and malformed ones."""
    events: list[Event] = []
    for line_number, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue
        try:
            events.append(parse_event_line(line))
        except EventLineError as e:
            logger.warning("Skipping event line %d (%s): %s", line_number, e, line)
    return events


def _decode_lines(raw: bytes) -> list[str]:
    lines = []
    for line_number, raw_line in enumerate(raw.splitlines(), 1):
        try:
            lines.append(raw_line.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning("Event line %d is not valid UTF-8 (%s), replacing bad bytes", line_number, e.reason)
            lines.append(raw_line.decode("utf-8", errors="replace"))
    return lines


def load_events(path: str | Path) -> list[Event]:
    """Load and decode an event log file.

    Bytes that are not valid UTF-8 are replaced, so a bad byte in a comment
    does not cost the whole file.

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(path)
    events = parse_events(_decode_lines(path.read_bytes()))
    logger.info("Loaded %d events from %s", len(events), path)
    return events
