"""Configuration and event log loading."""

from .loader import EventLineError, load_config, load_events, parse_event_line, parse_events

__all__ = [
    "EventLineError",
    "load_config",
    "load_events",
    "parse_event_line",
    "parse_events",
]
