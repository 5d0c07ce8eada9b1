"""Race configuration model."""

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from biathlonsim.timeutils import format_duration, format_time_of_day, parse_duration, parse_time_of_day


class RaceConfig(BaseModel):
    """Immutable description of a single biathlon race."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    laps: int = Field(..., ge=1, description="Number of main laps")
    lap_len: int = Field(..., gt=0, alias="lapLen", description="Main lap length in metres")
    penalty_len: int = Field(
        default=0,
        ge=0,
        alias="penaltyLen",
        description="Penalty loop length in metres",
    )
    firing_lines: int = Field(
        default=1,
        ge=1,
        alias="firingLines",
        description="Number of firing lines on the range",
    )
    start: datetime = Field(..., description="Planned start time of the first competitor")
    start_delta: timedelta = Field(
        ...,
        alias="startDelta",
        description="Interval between consecutive competitors' starts",
    )

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "RaceConfig":
        """Build a config from the raw JSON file layout.

        ``start`` and ``startDelta`` are strings in the file and are parsed
        here so that a malformed value surfaces as a FormatError rather than
        a validation error.

        Raises:
            FormatError: If ``start`` or ``startDelta`` cannot be parsed
        """
        values = dict(data)
        if isinstance(values.get("start"), str):
            values["start"] = parse_time_of_day(values["start"])
        if isinstance(values.get("startDelta"), str):
            values["startDelta"] = parse_duration(values["startDelta"])
        return cls.model_validate(values)

    def describe(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.laps} laps x {self.lap_len}m, penalty loop {self.penalty_len}m, "
            f"{self.firing_lines} firing line(s), start {format_time_of_day(self.start)} "
            f"every {format_duration(self.start_delta)}"
        )
