"""Biathlon race replay: competitor state machine, results and reporting."""

from biathlonsim.errors import BiathlonSimError, ConfigError, FormatError
from biathlonsim.models import Event, EventKind, RaceConfig
from biathlonsim.simulation import Competitor, CompetitorStatus, RaceReplay, ReplayOutcome

__version__ = "0.1.0"

__all__ = [
    "BiathlonSimError",
    "Competitor",
    "CompetitorStatus",
    "ConfigError",
    "Event",
    "EventKind",
    "FormatError",
    "RaceConfig",
    "RaceReplay",
    "ReplayOutcome",
]
