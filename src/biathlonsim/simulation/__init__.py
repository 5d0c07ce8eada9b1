"""Replay engine and competitor state machine."""

from .competitor import Competitor, CompetitorStatus, Lap, ShootingSession
from .replay import RaceReplay, ReplayOutcome
from .transitions import TransitionResult, apply_event

__all__ = [
    "Competitor",
    "CompetitorStatus",
    "Lap",
    "RaceReplay",
    "ReplayOutcome",
    "ShootingSession",
    "TransitionResult",
    "apply_event",
]
