"""Ranking of competitors and flattened result rows."""

from dataclasses import dataclass
from datetime import timedelta

from biathlonsim.models import RaceConfig
from biathlonsim.simulation.competitor import Competitor, CompetitorStatus, LapSummary, PenaltyStats

# Order of non-finishers in the results table
_STATUS_ORDER = {
    CompetitorStatus.NOT_FINISHED: 1,
    CompetitorStatus.NOT_STARTED: 2,
    CompetitorStatus.DISQUALIFIED: 3,
}


def _rank_key(competitor: Competitor) -> tuple:
    race_time = competitor.race_time()
    if race_time is not None:
        return (0, race_time, competitor.id)
    return (1 + _STATUS_ORDER.get(competitor.status, 4), timedelta(0), competitor.id)


def rank_competitors(competitors: dict[int, Competitor]) -> list[Competitor]:
    """Sort competitors for the results table.

    Finishers come first by race time, then non-finishers grouped by status.
    Ties are broken by competitor id.
    """
    return sorted(competitors.values(), key=_rank_key)


@dataclass
class RaceResult:
    """Final result line for one competitor."""

    position: int | None
    competitor_id: int
    status: CompetitorStatus
    result: str
    race_time: timedelta | None
    laps: list[LapSummary | None]
    penalty: PenaltyStats
    hits: int
    shots: int
    shooting: str
    comment: str | None = None


def build_results(competitors: dict[int, Competitor], config: RaceConfig) -> list[RaceResult]:
    """Build ranked result lines. Only finishers get a position."""
    results = []
    position = 0
    for competitor in rank_competitors(competitors):
        race_time = competitor.race_time()
        if race_time is not None:
            position += 1
        results.append(RaceResult(
            position=position if race_time is not None else None,
            competitor_id=competitor.id,
            status=competitor.status,
            result=competitor.result_label(),
            race_time=race_time,
            laps=competitor.lap_summaries(config),
            penalty=competitor.penalty_stats(config),
            hits=competitor.total_hits,
            shots=competitor.total_shots,
            shooting=competitor.shooting_summary(),
            comment=competitor.dnf_comment or competitor.disqualification_reason,
        ))
    return results
