"""Command-line entry point: replay a race from a config and an event log.

Usage:
    biathlonsim --config config.json --events events [--stats] [--export]
"""

import argparse
import logging
import sys

from biathlonsim.analysis import summarize_field
from biathlonsim.data import load_config, load_events
from biathlonsim.errors import BiathlonSimError
from biathlonsim.output import ConsoleOutput, Exporter
from biathlonsim.simulation import RaceReplay

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay a biathlon race event log")
    parser.add_argument(
        "--config",
        default="config.json",
        help="Path to the configuration file (default: config.json)",
    )
    parser.add_argument(
        "--events",
        default="events",
        help="Path to the events file (default: events)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show lap statistics across the field",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export results to CSV/JSON",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory for exports (default: output)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except BiathlonSimError as e:
        logger.error("Error loading configuration: %s", e)
        return 1
    print(f"Configuration loaded from {args.config}: {config.describe()}\n")

    try:
        events = load_events(args.events)
    except OSError as e:
        logger.error("Error loading events: %s", e)
        return 1
    print(f"Loaded {len(events)} events from {args.events}.\n")

    outcome = RaceReplay(config).run(events)

    ConsoleOutput.print_output_log(outcome.log)
    ConsoleOutput.print_results_table(outcome.competitors, config)

    if args.stats:
        ConsoleOutput.print_field_summary(summarize_field(outcome.competitors))

    if args.export:
        print(f"\nExporting results to {args.output_dir}/...")
        exporter = Exporter(output_dir=args.output_dir)
        files = exporter.export_all(outcome.competitors, outcome.log, config)

        print("Exported files:")
        for fmt, path in files.items():
            print(f"  {fmt}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
