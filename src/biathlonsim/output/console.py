"""Console output formatting."""

from datetime import timedelta

from biathlonsim.analysis.laps import FieldSummary
from biathlonsim.models import RaceConfig
from biathlonsim.output.ranking import RaceResult, build_results
from biathlonsim.simulation.competitor import Competitor, LapSummary, PenaltyStats
from biathlonsim.timeutils import format_duration

ROW_FORMAT = "{:<15} {:<5} {:<45} {:<23} {:<10}"


def format_lap(summary: LapSummary | None) -> str:
    """Render one lap cell, ``{,}`` when the lap was not completed."""
    if summary is None:
        return "{,}"
    return f"{{{format_duration(summary.duration)}, {summary.average_speed:.3f}}}"


def format_laps(laps: list[LapSummary | None]) -> str:
    return "[" + ", ".join(format_lap(lap) for lap in laps) + "]"


def format_penalty(penalty: PenaltyStats) -> str:
    return f"{{{format_duration(penalty.total_time)}, {penalty.average_speed:.3f}}}"


def format_result_row(result: RaceResult) -> str:
    """Render one line of the results table."""
    return ROW_FORMAT.format(
        result.result,
        result.competitor_id,
        format_laps(result.laps),
        format_penalty(result.penalty),
        result.shooting,
    )


class ConsoleOutput:
    """Formats replay results for console display."""

    @staticmethod
    def print_output_log(log: list[str]) -> None:
        """Print the narration log.

        Args:
            log: Narration lines in processing order
        """
        print("Output log")
        print("----------")
        for line in log:
            print(line)
        print()

    @staticmethod
    def print_results_table(competitors: dict[int, Competitor], config: RaceConfig) -> None:
        """Print the ranked results table.

        Args:
            competitors: Finalized competitors by id
            config: Race configuration
        """
        print("Resulting table")
        print("---------------")
        print(ROW_FORMAT.format(
            "Result/Status", "ID", "Lap Details (Time, Speed m/s)",
            "Penalty (Time, Speed m/s)", "Shooting",
        ))
        for result in build_results(competitors, config):
            print(format_result_row(result))

    @staticmethod
    def print_field_summary(summary: FieldSummary) -> None:
        """Print lap statistics across the whole field."""
        print("\n" + "=" * 60)
        print("FIELD STATISTICS")
        print("=" * 60)
        print(f"Competitors: {summary.competitors}  Finishers: {summary.finishers}")
        if summary.fastest_lap is not None:
            lap_number, competitor_id, duration = summary.fastest_lap
            print(
                f"Fastest lap: {format_duration(duration)} "
                f"(lap {lap_number}, competitor {competitor_id})"
            )
        print(f"Shooting accuracy: {summary.shooting_accuracy:.1f}%")

        if not summary.per_lap.empty:
            print(f"\n{'Lap':<4} {'Done':<5} {'Fastest':<13} {'Mean':<13} {'Mean m/s':<9} {'Best m/s':<9}")
            print("-" * 60)
            for lap_number, row in summary.per_lap.iterrows():
                print(
                    f"{lap_number:<4} "
                    f"{int(row['count']):<5} "
                    f"{format_duration(timedelta(seconds=row['fastest_s'])):<13} "
                    f"{format_duration(timedelta(seconds=row['mean_duration_s'])):<13} "
                    f"{row['mean_speed']:<9.3f} "
                    f"{row['best_speed']:<9.3f}"
                )
        print("=" * 60)
