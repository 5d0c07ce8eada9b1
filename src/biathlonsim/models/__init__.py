"""Data models for biathlon race replay."""

from .config import RaceConfig
from .event import Event, EventKind

__all__ = [
    "Event",
    "EventKind",
    "RaceConfig",
]
