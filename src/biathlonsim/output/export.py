"""Export replay results to CSV, JSON and text."""

import csv
import json
from pathlib import Path
from typing import Any

from biathlonsim.analysis.laps import build_lap_frame
from biathlonsim.models import RaceConfig
from biathlonsim.output.ranking import build_results
from biathlonsim.simulation.competitor import Competitor
from biathlonsim.timeutils import format_duration, format_time_of_day


class Exporter:
    """Exports replay results to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_results_csv(
        self,
        competitors: dict[int, Competitor],
        config: RaceConfig,
        filename: str = "results.csv",
    ) -> Path:
        """Export the ranked results table to CSV.

        Args:
            competitors: Finalized competitors by id
            config: Race configuration
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            header = ["position", "competitor_id", "status", "result"]
            for lap_number in range(1, config.laps + 1):
                header += [f"lap{lap_number}_time", f"lap{lap_number}_speed"]
            header += ["penalty_time", "penalty_speed", "penalty_loops", "hits", "shots", "comment"]
            writer.writerow(header)

            for result in build_results(competitors, config):
                row: list[Any] = [
                    result.position or "",
                    result.competitor_id,
                    result.status.value,
                    result.result,
                ]
                for lap in result.laps:
                    if lap is None:
                        row += ["", ""]
                    else:
                        row += [format_duration(lap.duration), f"{lap.average_speed:.3f}"]
                row += [
                    format_duration(result.penalty.total_time),
                    f"{result.penalty.average_speed:.3f}",
                    result.penalty.loops,
                    result.hits,
                    result.shots,
                    result.comment or "",
                ]
                writer.writerow(row)

        return filepath

    def export_results_json(
        self,
        competitors: dict[int, Competitor],
        config: RaceConfig,
        filename: str = "results.json",
    ) -> Path:
        """Export results including lap and shooting detail to JSON."""
        filepath = self.output_dir / filename

        data: dict[str, Any] = {
            "config": {
                "laps": config.laps,
                "lap_len": config.lap_len,
                "penalty_len": config.penalty_len,
                "firing_lines": config.firing_lines,
                "start": format_time_of_day(config.start),
                "start_delta": format_duration(config.start_delta),
            },
            "results": [],
        }

        for result in build_results(competitors, config):
            competitor = competitors[result.competitor_id]
            data["results"].append({
                "position": result.position,
                "competitor_id": result.competitor_id,
                "status": result.status.value,
                "result": result.result,
                "laps": [
                    {
                        "number": lap.number,
                        "start": format_time_of_day(lap.start_time) if lap.start_time else None,
                        "end": format_time_of_day(lap.end_time) if lap.end_time else None,
                        "duration": format_duration(lap.duration) if lap.is_completed else None,
                        "speed": round(lap.average_speed, 3) if lap.is_completed else None,
                        "shooting": [
                            {
                                "range": session.range_id,
                                "hits": session.hits,
                                "shots": session.shots,
                                "penalties": session.penalties_incurred,
                            }
                            for session in lap.shooting
                        ],
                        "penalties_served": lap.penalties_served,
                    }
                    for lap in competitor.laps
                ],
                "penalty": {
                    "time": format_duration(result.penalty.total_time),
                    "loops": result.penalty.loops,
                    "speed": round(result.penalty.average_speed, 3),
                },
                "shooting": result.shooting,
                "comment": result.comment,
            })

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def export_laps_csv(
        self,
        competitors: dict[int, Competitor],
        filename: str = "laps.csv",
    ) -> Path:
        """Export one row per completed lap."""
        filepath = self.output_dir / filename
        build_lap_frame(competitors).to_csv(filepath, index=False, float_format="%.3f")
        return filepath

    def export_log(self, log: list[str], filename: str = "output.log") -> Path:
        """Write the narration log, one line per entry."""
        filepath = self.output_dir / filename
        filepath.write_text("".join(f"{line}\n" for line in log))
        return filepath

    def export_all(
        self,
        competitors: dict[int, Competitor],
        log: list[str],
        config: RaceConfig,
        prefix: str = "",
    ) -> dict[str, Path]:
        """Export all result formats.

        Args:
            competitors: Finalized competitors by id
            log: Narration log
            config: Race configuration
            prefix: Optional prefix for filenames

        Returns:
            Dictionary of format -> filepath
        """
        prefix = f"{prefix}_" if prefix else ""

        return {
            "results_csv": self.export_results_csv(competitors, config, f"{prefix}results.csv"),
            "results_json": self.export_results_json(competitors, config, f"{prefix}results.json"),
            "laps_csv": self.export_laps_csv(competitors, f"{prefix}laps.csv"),
            "log": self.export_log(log, f"{prefix}output.log"),
        }
