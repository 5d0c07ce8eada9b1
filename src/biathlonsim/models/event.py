"""Decoded race events and their narration."""

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from biathlonsim.timeutils import format_time_of_day


class EventKind(IntEnum):
    """Event identifiers as they appear in the event log."""

    REGISTERED = 1
    START_TIME_ASSIGNED = 2
    ON_START_LINE = 3
    STARTED = 4
    ON_FIRING_RANGE = 5
    TARGET_HIT = 6
    LEFT_FIRING_RANGE = 7
    ENTERED_PENALTY_LOOP = 8
    LEFT_PENALTY_LOOP = 9
    LAP_COMPLETED = 10
    CANNOT_CONTINUE = 11

    # Outgoing events
    DISQUALIFIED = 32
    FINISHED = 33


# Payload field each kind cannot do without
_REQUIRED_PAYLOAD = {
    EventKind.START_TIME_ASSIGNED: "scheduled_start",
    EventKind.ON_FIRING_RANGE: "firing_range",
    EventKind.TARGET_HIT: "target",
    EventKind.CANNOT_CONTINUE: "comment",
}


class Event(BaseModel):
    """One occurrence in the race, already validated and typed."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Time of day the event happened")
    kind: EventKind = Field(..., description="Event identifier")
    competitor_id: int = Field(..., ge=0, description="Competitor the event refers to")

    scheduled_start: datetime | None = Field(default=None, description="Drawn start time")
    firing_range: int | None = Field(default=None, description="Firing range number")
    target: int | None = Field(default=None, description="Target number")
    comment: str | None = Field(default=None, description="Free text (reason for DNF/DSQ)")

    @model_validator(mode="after")
    def _check_payload(self) -> "Event":
        required = _REQUIRED_PAYLOAD.get(self.kind)
        if required is not None and getattr(self, required) is None:
            raise ValueError(f"{self.kind.name} event requires '{required}'")
        return self

    def describe(self) -> str:
        """Human readable description used in the narration log."""
        cid = self.competitor_id
        kind = self.kind
        if kind == EventKind.REGISTERED:
            return f"The competitor({cid}) registered"
        if kind == EventKind.START_TIME_ASSIGNED:
            return (
                f"The start time for the competitor({cid}) was set by a draw to "
                f"{format_time_of_day(self.scheduled_start)}"
            )
        if kind == EventKind.ON_START_LINE:
            return f"The competitor({cid}) is on the start line"
        if kind == EventKind.STARTED:
            return f"The competitor({cid}) has started"
        if kind == EventKind.ON_FIRING_RANGE:
            return f"The competitor({cid}) is on the firing range({self.firing_range})"
        if kind == EventKind.TARGET_HIT:
            return f"The target({self.target}) has been hit by competitor({cid})"
        if kind == EventKind.LEFT_FIRING_RANGE:
            return f"The competitor({cid}) left the firing range"
        if kind == EventKind.ENTERED_PENALTY_LOOP:
            return f"The competitor({cid}) entered the penalty laps"
        if kind == EventKind.LEFT_PENALTY_LOOP:
            return f"The competitor({cid}) left the penalty laps"
        if kind == EventKind.LAP_COMPLETED:
            return f"The competitor({cid}) ended the main lap"
        if kind == EventKind.CANNOT_CONTINUE:
            return f"The competitor({cid}) can't continue: {self.comment}"
        if kind == EventKind.DISQUALIFIED:
            return f"The competitor({cid}) is disqualified"
        if kind == EventKind.FINISHED:
            return f"The competitor({cid}) has finished"
        return f"Unknown event {int(kind)} for competitor {cid}"

    def narrate(self) -> str:
        """Narration log line: ``[HH:MM:SS.mmm] description``."""
        return f"[{format_time_of_day(self.timestamp)}] {self.describe()}"
