# pylint: disable=import-outside-toplevel
"""Main entry point for the fitlog2tcx CLI.

This module provides the command-line interface for fitlog2tcx, allowing users to
convert fitlog exports to TCX, inspect the activities of a fitlog file, write a
configuration file, and access help/documentation.
"""

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()


def main(argv=None):
    """Main function for the fitlog2tcx CLI."""
    parser = argparse.ArgumentParser(prog="fitlog2tcx", description="fitlog2tcx CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert a fitlog file to a TCX file")
    convert_parser.add_argument("source", type=str, help="Path to the .fitlog (or .fitlog.gz) file")
    convert_parser.add_argument(
        "target",
        type=str,
        nargs="?",
        help="Path of the .tcx file to write (default: source with a .tcx suffix)",
    )
    convert_parser.add_argument("--creator", action="store_true", help="Add the Creator device block")
    convert_parser.add_argument(
        "--corrected-markers",
        action="store_true",
        help="Assign the first distance marker to the first lap instead of the second",
    )
    convert_parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    show_parser = subparsers.add_parser("show", help="List the activities in a fitlog file")
    show_parser.add_argument("source", type=str, help="Path to the .fitlog (or .fitlog.gz) file")

    subparsers.add_parser("configure", help="Write a fitlog2tcx configuration file")
    subparsers.add_parser("help", help="Show usage and documentation")

    args = parser.parse_args(argv)

    if args.command == "convert":
        from fitlog2tcx.commands.convert import run

        return run(
            args.source,
            args.target,
            creator=args.creator,
            corrected_markers=args.corrected_markers,
            debug=args.debug,
        )
    elif args.command == "show":
        from fitlog2tcx.commands.show import run

        return run(args.source)
    elif args.command == "configure":
        from fitlog2tcx.commands.configure import run

        run()
        return 0
    elif args.command == "help":
        print(
            """
fitlog2tcx - Convert SportTracks fitlog exports to Training Center XML (TCX).

Usage:
    python -m fitlog2tcx <command>

Commands:
    convert SOURCE [TARGET]   Convert a fitlog file to TCX (TARGET defaults to SOURCE.tcx)
    show SOURCE               List the activities found in a fitlog file
    configure                 Write fitlog2tcx_config.json (creator block, marker indexing, ...)
    help                      Show this help and usage documentation

Configuration is read from fitlog2tcx_config.json in the current or parent
directory, or from the file named by FITLOG2TCX_CONFIG (a .env file is honoured).
"""
        )
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
