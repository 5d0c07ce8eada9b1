"""Analysis of replayed races."""

from .laps import FieldSummary, build_lap_frame, summarize_field, summarize_laps

__all__ = ["FieldSummary", "build_lap_frame", "summarize_field", "summarize_laps"]
