"""CLI command: show, list the activities of a fitlog file."""

import sys

from tabulate import tabulate

from fitlog2tcx.appconfig import load_config
from fitlog2tcx.core import Converter
from fitlog2tcx.xmlfields import ParseError, format_timestamp


def activity_rows(activities) -> list[list]:
    rows = []
    for activity in activities:
        rows.append(
            [
                format_timestamp(activity.start_time),
                activity.category or "-",
                activity.sport or "-",
                len(activity.laps),
                len(activity.track),
                f"{activity.total_distance / 1000:.2f}",
                int(activity.total_duration),
                int(activity.total_calories),
            ]
        )
    return rows


def run(source) -> int:
    """Print one table row per activity found in *source*."""
    try:
        config = load_config()
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    with Converter(config) as converter:
        try:
            activities = converter.read_source(source)
        except (ParseError, IndexError, OSError) as e:
            print(f"Error reading {source}: {e}", file=sys.stderr)
            return 1

        if not activities:
            print(f"No activities in {source}.")
            return 0

        print(
            tabulate(
                activity_rows(activities),
                headers=["Start (UTC)", "Category", "Sport", "Laps", "Points", "Distance (km)", "Seconds", "kcal"],
                tablefmt="simple",
            )
        )
        print(f"\n{len(activities)} activities")
    return 0
