"""Time-of-day and duration parsing/formatting.

All timestamps are anchored to a single reference date so that only the
time of day and the differences between timestamps carry meaning.
"""

import re
from datetime import datetime, timedelta, timezone

from biathlonsim.errors import FormatError

REFERENCE_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})(?:\.(\d{3}))?$")
_INT_FIELD = re.compile(r"^[+-]?\d+$")


def parse_time_of_day(value: str) -> datetime:
    """Parse ``HH:MM:SS`` or ``HH:MM:SS.mmm`` into an anchored timestamp.

    Args:
        value: Time string

    Returns:
        Timezone-aware datetime on the reference date

    Raises:
        FormatError: If the string is malformed or a field is out of range
    """
    match = _TIME_OF_DAY.match(value.strip())
    if match is None:
        raise FormatError(f"failed to parse time string '{value}'")

    hours, minutes, seconds = (int(g) for g in match.group(1, 2, 3))
    millis = int(match.group(4) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise FormatError(f"time string '{value}' is out of range")

    return REFERENCE_DATE.replace(
        hour=hours,
        minute=minutes,
        second=seconds,
        microsecond=millis * 1000,
    )


def parse_duration(value: str) -> timedelta:
    """Parse a strict ``HH:MM:SS`` duration.

    A fractional suffix on the seconds field is accepted and dropped.

    Raises:
        FormatError: If the string does not have three integer fields
    """
    parts = value.split(":")
    if len(parts) != 3:
        raise FormatError(f"invalid duration format '{value}', expected HH:MM:SS")

    seconds_field = parts[2].split(".")[0]
    names = ("hours", "minutes", "seconds")
    fields = []
    for name, raw in zip(names, (parts[0], parts[1], seconds_field)):
        if not _INT_FIELD.match(raw):
            raise FormatError(f"invalid {name} in duration '{value}'")
        fields.append(int(raw))

    hours, minutes, seconds = fields
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(duration: timedelta) -> str:
    """Render a duration as ``HH:MM:SS.mmm``, truncated to milliseconds."""
    total_ms = abs(duration) // timedelta(milliseconds=1)
    hours, total_ms = divmod(total_ms, 3_600_000)
    minutes, total_ms = divmod(total_ms, 60_000)
    seconds, millis = divmod(total_ms, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_time_of_day(moment: datetime) -> str:
    """Render a timestamp as ``HH:MM:SS.mmm``."""
    return (
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}"
    )
