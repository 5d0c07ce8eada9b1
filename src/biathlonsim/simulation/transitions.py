"""Competitor state machine: applies one event to one competitor."""

from collections.abc import Callable
from dataclasses import dataclass, field

from biathlonsim.models import Event, EventKind, RaceConfig
from biathlonsim.simulation.competitor import (
    SHOTS_PER_SESSION,
    Competitor,
    CompetitorStatus,
    Lap,
    ShootingSession,
)


@dataclass
class TransitionResult:
    """Side products of applying an event.

    Warnings are soft diagnostics for events that arrived in an unexpected
    status; the transition is still applied. Follow-ups are synthetic events
    derived from the input (e.g. Finished after the last lap).
    """

    warnings: list[str] = field(default_factory=list)
    follow_ups: list[Event] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(f"Warning: {message}")


def _registered(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.REGISTERED)


def _start_time_assigned(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.scheduled_start = event.scheduled_start
    competitor.set_status(CompetitorStatus.SCHEDULED)


def _started(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    if competitor.status in (CompetitorStatus.NOT_STARTED, CompetitorStatus.DISQUALIFIED):
        result.warn(
            f"Competitor {competitor.id} received Start event but is already {competitor.status.value}."
        )
        return

    competitor.actual_start = event.timestamp
    competitor.set_status(CompetitorStatus.RACING)
    competitor.current_lap = 1
    competitor.ensure_progress().lap_start_time = event.timestamp
    if not competitor.laps:
        competitor.laps.append(Lap(number=1, start_time=event.timestamp))


def _on_firing_range(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.ON_FIRING_RANGE)
    progress = competitor.ensure_progress()
    progress.range_id = event.firing_range
    progress.range_entry_time = event.timestamp
    progress.hits_in_session = 0


def _target_hit(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    if competitor.status != CompetitorStatus.ON_FIRING_RANGE:
        result.warn(
            f"Competitor {competitor.id} ({competitor.status.value}) received TargetHit event "
            "but is not on firing range."
        )
    competitor.ensure_progress().hits_in_session += 1
    competitor.total_hits += 1


def _left_firing_range(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    if competitor.status != CompetitorStatus.ON_FIRING_RANGE:
        result.warn(
            f"Competitor {competitor.id} ({competitor.status.value}) received LeftFiringRange event "
            "but was not on firing range."
        )

    progress = competitor.ensure_progress()
    session = ShootingSession(
        range_id=progress.range_id,
        entry_time=progress.range_entry_time,
        exit_time=event.timestamp,
        hits=min(progress.hits_in_session, SHOTS_PER_SESSION),
    )
    competitor.total_shots += session.shots
    progress.penalties_to_serve = session.penalties_incurred

    lap = competitor.current_lap_record
    if lap is not None:
        lap.shooting.append(session)

    competitor.set_status(CompetitorStatus.RACING)


def _entered_penalty_loop(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.IN_PENALTY_LOOP)
    competitor.ensure_progress().penalty_entry_time = event.timestamp


def _left_penalty_loop(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.RACING)
    progress = competitor.ensure_progress()

    lap = competitor.current_lap_record
    if lap is not None:
        lap.penalty_entry_time = progress.penalty_entry_time
        lap.penalty_exit_time = event.timestamp
        lap.penalties_served = progress.penalties_to_serve
        competitor.total_penalties_served += progress.penalties_to_serve
    progress.penalties_to_serve = 0
    progress.penalty_entry_time = None


def _lap_completed(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    lap = competitor.current_lap_record
    if lap is not None:
        lap.end_time = event.timestamp

    if competitor.current_lap == config.laps:
        competitor.set_status(CompetitorStatus.COMPLETED)
        competitor.finish_time = event.timestamp
        result.follow_ups.append(Event(
            timestamp=event.timestamp,
            kind=EventKind.FINISHED,
            competitor_id=competitor.id,
        ))
        return

    competitor.current_lap += 1
    competitor.set_status(CompetitorStatus.RACING)
    competitor.ensure_progress().lap_start_time = event.timestamp
    if len(competitor.laps) < competitor.current_lap:
        competitor.laps.append(Lap(number=competitor.current_lap, start_time=event.timestamp))
    else:
        competitor.laps[competitor.current_lap - 1].start_time = event.timestamp


def _cannot_continue(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.NOT_FINISHED)
    competitor.dnf_comment = event.comment


def _disqualified(competitor: Competitor, event: Event, config: RaceConfig, result: TransitionResult) -> None:
    competitor.set_status(CompetitorStatus.DISQUALIFIED)
    if event.comment:
        competitor.disqualification_reason = event.comment


Handler = Callable[[Competitor, Event, RaceConfig, TransitionResult], None]

# OnStartLine and incoming Finished events are informational only
HANDLERS: dict[EventKind, Handler] = {
    EventKind.REGISTERED: _registered,
    EventKind.START_TIME_ASSIGNED: _start_time_assigned,
    EventKind.STARTED: _started,
    EventKind.ON_FIRING_RANGE: _on_firing_range,
    EventKind.TARGET_HIT: _target_hit,
    EventKind.LEFT_FIRING_RANGE: _left_firing_range,
    EventKind.ENTERED_PENALTY_LOOP: _entered_penalty_loop,
    EventKind.LEFT_PENALTY_LOOP: _left_penalty_loop,
    EventKind.LAP_COMPLETED: _lap_completed,
    EventKind.CANNOT_CONTINUE: _cannot_continue,
    EventKind.DISQUALIFIED: _disqualified,
}


def apply_event(competitor: Competitor, event: Event, config: RaceConfig) -> TransitionResult:
    """Apply a single event to the competitor it addresses.

    Args:
        competitor: Competitor record to mutate
        event: Event addressed to this competitor
        config: Race configuration

    Returns:
        Warnings raised and synthetic events generated by the transition
    """
    result = TransitionResult()
    competitor.last_event_time = event.timestamp

    handler = HANDLERS.get(event.kind)
    if handler is not None:
        handler(competitor, event, config, result)
    return result
