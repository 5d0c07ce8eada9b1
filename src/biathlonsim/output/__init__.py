"""Output formatting and export."""

from .console import ConsoleOutput
from .export import Exporter
from .ranking import RaceResult, build_results, rank_competitors

__all__ = ["ConsoleOutput", "Exporter", "RaceResult", "build_results", "rank_competitors"]
