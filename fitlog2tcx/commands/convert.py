"""CLI command: convert, turn a fitlog file into a TCX file."""

import sys

from fitlog2tcx.activity import MARKER_INDEXING_CORRECTED
from fitlog2tcx.appconfig import load_config
from fitlog2tcx.core import Converter, default_target_path
from fitlog2tcx.xmlfields import ParseError


def run(source, target=None, creator=False, corrected_markers=False, debug=False) -> int:
    """Convert *source* to *target*; return the process exit code."""
    try:
        config = load_config()
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    # Command-line flags only ever switch options on
    if creator:
        config["include_creator"] = True
    if corrected_markers:
        config["marker_indexing"] = MARKER_INDEXING_CORRECTED
    if debug:
        config["debug"] = True

    target = target or default_target_path(source)

    with Converter(config) as converter:
        try:
            activities = converter.read_source(source)
        except (ParseError, IndexError, OSError) as e:
            print(f"Error reading {source}: {e}", file=sys.stderr)
            return 1

        converter.convert()

        try:
            converter.write_target(target)
        except OSError as e:
            print(f"Error writing {target}: {e}", file=sys.stderr)
            return 1

    print(f"Converted {len(activities)} activities: {source} -> {target}")
    return 0
