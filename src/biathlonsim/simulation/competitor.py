"""Per-competitor race record."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from biathlonsim.models import RaceConfig
from biathlonsim.timeutils import format_duration

SHOTS_PER_SESSION = 5


class CompetitorStatus(str, Enum):
    """Competitor race status."""

    REGISTERED = "Registered"
    SCHEDULED = "Scheduled"
    RACING = "Racing"
    ON_FIRING_RANGE = "OnRange"
    IN_PENALTY_LOOP = "InPenalty"
    COMPLETED = "Completed"
    NOT_STARTED = "NotStarted"
    NOT_FINISHED = "NotFinished"
    DISQUALIFIED = "Disqualified"

    @property
    def is_terminal(self) -> bool:
        """Whether no further race progress is expected."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    CompetitorStatus.COMPLETED,
    CompetitorStatus.NOT_STARTED,
    CompetitorStatus.NOT_FINISHED,
    CompetitorStatus.DISQUALIFIED,
})
PRE_RACE_STATUSES = frozenset({
    CompetitorStatus.REGISTERED,
    CompetitorStatus.SCHEDULED,
})


@dataclass(frozen=True)
class ShootingSession:
    """One visit to a firing range."""

    range_id: int | None
    entry_time: datetime | None
    exit_time: datetime
    hits: int
    shots: int = SHOTS_PER_SESSION

    @property
    def penalties_incurred(self) -> int:
        """Misses in this session."""
        return max(self.shots - self.hits, 0)


@dataclass
class Lap:
    """A single main lap of a competitor."""

    number: int
    start_time: datetime | None = None
    end_time: datetime | None = None
    shooting: list[ShootingSession] = field(default_factory=list)
    penalty_entry_time: datetime | None = None
    penalty_exit_time: datetime | None = None
    penalties_served: int = 0

    # Derived during finalization
    duration: timedelta = timedelta(0)
    average_speed: float = 0.0

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

    @property
    def penalty_time(self) -> timedelta | None:
        """Time spent in the penalty loop, if both ends were observed."""
        if self.penalty_entry_time is None or self.penalty_exit_time is None:
            return None
        return self.penalty_exit_time - self.penalty_entry_time

    def calculate(self, lap_len: int) -> None:
        """Compute duration and average speed from start/end times."""
        if self.start_time is None or self.end_time is None:
            self.duration = timedelta(0)
            self.average_speed = 0.0
            return
        self.duration = self.end_time - self.start_time
        seconds = self.duration.total_seconds()
        self.average_speed = lap_len / seconds if seconds > 0 else 0.0


@dataclass
class LapProgress:
    """Work-in-progress state of a competitor who is out on the course.

    Nothing here is part of the result; completed work is committed to
    :class:`Lap` and :class:`ShootingSession`.
    """

    lap_start_time: datetime | None = None
    range_id: int | None = None
    range_entry_time: datetime | None = None
    hits_in_session: int = 0
    penalties_to_serve: int = 0
    penalty_entry_time: datetime | None = None


@dataclass(frozen=True)
class PenaltyStats:
    """Aggregated penalty loop usage of a competitor."""

    total_time: timedelta
    loops: int
    average_speed: float


@dataclass(frozen=True)
class LapSummary:
    """Duration and speed of a completed lap."""

    number: int
    duration: timedelta
    average_speed: float


@dataclass
class Competitor:
    """Tracks a competitor's state during and after the race."""

    id: int
    status: CompetitorStatus = CompetitorStatus.REGISTERED
    scheduled_start: datetime | None = None
    actual_start: datetime | None = None
    finish_time: datetime | None = None
    last_event_time: datetime | None = None

    current_lap: int = 0
    laps: list[Lap] = field(default_factory=list)
    progress: LapProgress | None = None

    total_hits: int = 0
    total_shots: int = 0
    total_penalties_served: int = 0

    dnf_comment: str | None = None
    disqualification_reason: str | None = None

    @property
    def current_lap_record(self) -> Lap | None:
        """Lap record for ``current_lap``, if one has been opened."""
        index = self.current_lap - 1
        if 0 <= index < len(self.laps):
            return self.laps[index]
        return None

    @property
    def shooting_sessions(self) -> list[ShootingSession]:
        return [session for lap in self.laps for session in lap.shooting]

    def ensure_progress(self) -> LapProgress:
        """Return the in-progress scratch state, creating it if needed."""
        if self.progress is None:
            self.progress = LapProgress()
        return self.progress

    def set_status(self, status: CompetitorStatus) -> None:
        """Change status, dropping scratch state on terminal statuses."""
        self.status = status
        if status.is_terminal:
            self.progress = None

    def calculate_results(self, config: RaceConfig) -> None:
        """Compute derived duration and speed for every lap."""
        for lap in self.laps:
            lap.calculate(config.lap_len)

    def race_time(self) -> timedelta | None:
        """Total race time if the competitor completed the race."""
        if (
            self.status != CompetitorStatus.COMPLETED
            or self.finish_time is None
            or self.actual_start is None
        ):
            return None
        return self.finish_time - self.actual_start

    def result_label(self) -> str:
        """Race time, or a bracketed status tag for non-finishers."""
        race_time = self.race_time()
        if race_time is not None:
            return format_duration(race_time)
        return f"[{self.status.value}]"

    def lap_summaries(self, config: RaceConfig) -> list[LapSummary | None]:
        """Per-lap results padded to the configured lap count.

        Laps that were not completed are ``None``.
        """
        summaries: list[LapSummary | None] = []
        for index in range(config.laps):
            lap = self.laps[index] if index < len(self.laps) else None
            if lap is None or not lap.is_completed:
                summaries.append(None)
            else:
                summaries.append(LapSummary(lap.number, lap.duration, lap.average_speed))
        return summaries

    def penalty_stats(self, config: RaceConfig) -> PenaltyStats:
        """Aggregate penalty loop time, count and speed over all laps."""
        total_time = timedelta(0)
        loops = 0
        for lap in self.laps:
            lap_penalty_time = lap.penalty_time
            if lap_penalty_time is not None:
                total_time += lap_penalty_time
            loops += lap.penalties_served

        seconds = total_time.total_seconds()
        average_speed = 0.0
        if seconds > 0 and loops > 0 and config.penalty_len > 0:
            average_speed = loops * config.penalty_len / seconds

        return PenaltyStats(total_time=total_time, loops=loops, average_speed=average_speed)

    def shooting_summary(self) -> str:
        """Hits over shots, e.g. ``"4/5"``."""
        return f"{self.total_hits}/{self.total_shots}"
