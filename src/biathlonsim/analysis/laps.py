"""Lap statistics across the whole field."""

from dataclasses import dataclass
from datetime import timedelta

import numpy as np
import pandas as pd

from biathlonsim.simulation.competitor import Competitor, CompetitorStatus

LAP_COLUMNS = [
    "competitor_id", "lap", "duration_s", "speed",
    "hits", "shots", "penalties_served", "penalty_s",
]


def build_lap_frame(competitors: dict[int, Competitor]) -> pd.DataFrame:
    """One row per completed lap of every competitor.

    Lap durations and speeds are the ones computed during finalization, so
    this should be called on finalized competitors.
    """
    rows = []
    for competitor in competitors.values():
        for lap in competitor.laps:
            if not lap.is_completed:
                continue
            penalty_time = lap.penalty_time
            rows.append({
                "competitor_id": competitor.id,
                "lap": lap.number,
                "duration_s": lap.duration.total_seconds(),
                "speed": lap.average_speed,
                "hits": sum(session.hits for session in lap.shooting),
                "shots": sum(session.shots for session in lap.shooting),
                "penalties_served": lap.penalties_served,
                "penalty_s": penalty_time.total_seconds() if penalty_time is not None else 0.0,
            })
    return pd.DataFrame(rows, columns=LAP_COLUMNS)


def summarize_laps(frame: pd.DataFrame) -> pd.DataFrame:
    """Aggregate lap rows per lap number.

    Returns:
        DataFrame indexed by lap with count, fastest_s, mean_duration_s,
        mean_speed and best_speed columns
    """
    if frame.empty:
        return pd.DataFrame(
            columns=["count", "fastest_s", "mean_duration_s", "mean_speed", "best_speed"]
        )
    return frame.groupby("lap").agg(
        count=("duration_s", "size"),
        fastest_s=("duration_s", "min"),
        mean_duration_s=("duration_s", "mean"),
        mean_speed=("speed", "mean"),
        best_speed=("speed", "max"),
    )


@dataclass
class FieldSummary:
    """Statistics of a finalized race across all competitors."""

    competitors: int
    finishers: int
    fastest_lap: tuple[int, int, timedelta] | None  # (lap, competitor_id, duration)
    shooting_accuracy: float  # percent
    per_lap: pd.DataFrame


def summarize_field(competitors: dict[int, Competitor]) -> FieldSummary:
    """Compute field-wide lap and shooting statistics."""
    frame = build_lap_frame(competitors)

    fastest_lap = None
    if not frame.empty:
        best = frame.loc[frame["duration_s"].idxmin()]
        fastest_lap = (
            int(best["lap"]),
            int(best["competitor_id"]),
            timedelta(seconds=float(best["duration_s"])),
        )

    hits = np.array([c.total_hits for c in competitors.values()], dtype=float)
    shots = np.array([c.total_shots for c in competitors.values()], dtype=float)
    total_shots = shots.sum()
    accuracy = float(hits.sum() / total_shots * 100) if total_shots > 0 else 0.0

    finishers = sum(1 for c in competitors.values() if c.status == CompetitorStatus.COMPLETED)

    return FieldSummary(
        competitors=len(competitors),
        finishers=finishers,
        fastest_lap=fastest_lap,
        shooting_accuracy=accuracy,
        per_lap=summarize_laps(frame),
    )
