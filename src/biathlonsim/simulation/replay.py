"""Timeline replay engine."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from biathlonsim.models import Event, RaceConfig
from biathlonsim.simulation.competitor import PRE_RACE_STATUSES, Competitor, CompetitorStatus
from biathlonsim.simulation.transitions import HANDLERS, apply_event

logger = logging.getLogger(__name__)


@dataclass
class ReplayOutcome:
    """Finalized competitors and the narration log of a replay."""

    competitors: dict[int, Competitor]
    log: list[str]


class RaceReplay:
    """Replays a race event log and derives every competitor's result."""

    def __init__(self, config: RaceConfig):
        """Initialize the replay.

        Args:
            config: Race configuration
        """
        self.config = config
        self.competitors: dict[int, Competitor] = {}
        self.log: list[str] = []

    def run(self, events: Iterable[Event]) -> ReplayOutcome:
        """Replay all events in timestamp order and finalize results.

        Events sharing a timestamp keep their input order.

        Args:
            events: Decoded events in any order

        Returns:
            ReplayOutcome with the competitor map and narration log
        """
        ordered = sorted(events, key=lambda e: e.timestamp)
        logger.debug("Replaying %d events", len(ordered))

        for event in ordered:
            self.process_event(event)

        self.finalize()
        return ReplayOutcome(competitors=self.competitors, log=self.log)

    def upsert_competitor(self, competitor_id: int) -> Competitor:
        """Return the competitor with this id, registering it on first sight."""
        competitor = self.competitors.get(competitor_id)
        if competitor is None:
            competitor = Competitor(id=competitor_id)
            self.competitors[competitor_id] = competitor
        return competitor

    def process_event(self, event: Event) -> None:
        """Narrate one event and apply it to its competitor."""
        self.log.append(event.narrate())
        if event.kind not in HANDLERS:
            logger.debug("No state change for %s of competitor %d", event.kind.name, event.competitor_id)

        competitor = self.upsert_competitor(event.competitor_id)
        result = apply_event(competitor, event, self.config)

        for warning in result.warnings:
            logger.info(warning)
            self.log.append(warning)
        for follow_up in result.follow_ups:
            self.log.append(follow_up.narrate())

    def finalize(self) -> None:
        """Resolve competitors who never started and compute lap statistics.

        Safe to call more than once.
        """
        for competitor in self.competitors.values():
            if self._never_started(competitor):
                competitor.set_status(CompetitorStatus.NOT_STARTED)
            competitor.calculate_results(self.config)

    @staticmethod
    def _never_started(competitor: Competitor) -> bool:
        if competitor.actual_start is not None:
            return False
        if competitor.status in PRE_RACE_STATUSES:
            return True
        # A drawn start without a Started event means the competitor missed it,
        # unless they already left the race some other way
        return competitor.scheduled_start is not None and competitor.status not in (
            CompetitorStatus.DISQUALIFIED,
            CompetitorStatus.NOT_FINISHED,
        )
