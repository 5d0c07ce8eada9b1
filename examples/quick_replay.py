#!/usr/bin/env python3
"""Quick replay example using a synthetic race.

This example builds the events in code instead of reading an event log,
making it useful for trying out the replay engine.

Usage:
    python examples/quick_replay.py
"""

import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from biathlonsim.analysis import summarize_field
from biathlonsim.models import Event, EventKind, RaceConfig
from biathlonsim.output import ConsoleOutput
from biathlonsim.simulation import RaceReplay
from biathlonsim.timeutils import parse_duration, parse_time_of_day


def create_race_events(config: RaceConfig) -> list[Event]:
    """Create a small mass-start race with mixed shooting results."""

    # (competitor id, lap duration in seconds, hits per session)
    field_data = [
        (1, 610, [5, 4]),
        (2, 595, [3, 5]),
        (3, 640, [5, 5]),
        (4, 600, [2]),
    ]

    events: list[Event] = []
    for offset, (competitor_id, lap_seconds, hits) in enumerate(field_data):
        scheduled = config.start + offset * config.start_delta
        t = scheduled - timedelta(minutes=30)
        events.append(Event(timestamp=t, kind=EventKind.REGISTERED, competitor_id=competitor_id))
        events.append(Event(
            timestamp=t + timedelta(minutes=5),
            kind=EventKind.START_TIME_ASSIGNED,
            competitor_id=competitor_id,
            scheduled_start=scheduled,
        ))
        events.append(Event(timestamp=scheduled, kind=EventKind.STARTED, competitor_id=competitor_id))

        t = scheduled
        for lap, lap_hits in enumerate(hits, 1):
            range_entry = t + timedelta(seconds=lap_seconds * 0.6)
            events.append(Event(
                timestamp=range_entry,
                kind=EventKind.ON_FIRING_RANGE,
                competitor_id=competitor_id,
                firing_range=1,
            ))
            for target in range(1, lap_hits + 1):
                events.append(Event(
                    timestamp=range_entry + timedelta(seconds=5 * target),
                    kind=EventKind.TARGET_HIT,
                    competitor_id=competitor_id,
                    target=target,
                ))
            range_exit = range_entry + timedelta(seconds=30)
            events.append(Event(
                timestamp=range_exit,
                kind=EventKind.LEFT_FIRING_RANGE,
                competitor_id=competitor_id,
            ))
            misses = 5 - lap_hits
            if misses:
                events.append(Event(
                    timestamp=range_exit + timedelta(seconds=2),
                    kind=EventKind.ENTERED_PENALTY_LOOP,
                    competitor_id=competitor_id,
                ))
                events.append(Event(
                    timestamp=range_exit + timedelta(seconds=2 + 25 * misses),
                    kind=EventKind.LEFT_PENALTY_LOOP,
                    competitor_id=competitor_id,
                ))
            t += timedelta(seconds=lap_seconds + 25 * misses)
            events.append(Event(timestamp=t, kind=EventKind.LAP_COMPLETED, competitor_id=competitor_id))

        if len(hits) < config.laps:
            events.append(Event(
                timestamp=t + timedelta(minutes=3),
                kind=EventKind.CANNOT_CONTINUE,
                competitor_id=competitor_id,
                comment="Broken ski",
            ))

    # A registered competitor who never shows up
    events.append(Event(
        timestamp=config.start - timedelta(minutes=20),
        kind=EventKind.REGISTERED,
        competitor_id=5,
    ))
    return events


def main():
    config = RaceConfig(
        laps=2,
        lap_len=3500,
        penalty_len=150,
        firing_lines=1,
        start=parse_time_of_day("10:00:00"),
        start_delta=parse_duration("00:00:30"),
    )
    print(f"Race: {config.describe()}\n")

    outcome = RaceReplay(config).run(create_race_events(config))

    ConsoleOutput.print_output_log(outcome.log)
    ConsoleOutput.print_results_table(outcome.competitors, config)
    ConsoleOutput.print_field_summary(summarize_field(outcome.competitors))


if __name__ == "__main__":
    main()
