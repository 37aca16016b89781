"""Command-line interface for stop-timetables."""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from stop_timetables.api import get_departures, setup, validate
from stop_timetables.config import default_config_dir, load_config
from stop_timetables.output.text import render_departures
from stop_timetables.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _conf_dir(args: argparse.Namespace) -> Path:
    return Path(args.config_dir) if args.config_dir else default_config_dir()


def cmd_init(args: argparse.Namespace) -> int:
    """Execute init command."""
    setup_logging(args.verbose)

    try:
        config = setup(args.source, _conf_dir(args))
        print("\nConfiguration saved!")
        for stop in config.stops:
            print(f"  - {stop.name}: {len(stop.schedule)} records")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Setup failed")
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Execute show command."""
    setup_logging(args.verbose)

    try:
        config = load_config(_conf_dir(args))
        when = datetime.combine(args.date, datetime.now().time()) if args.date else None
        departures = get_departures(config, when, unknown_last=args.unknown_last)
        print(render_departures(departures, limit=args.limit))
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Query failed")
        return 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command."""
    setup_logging(args.verbose)

    try:
        report = validate(args.input)
        if report.valid:
            print("\nValidation successful!")
            print(f"Stats: {report.stats}")
            if report.warnings:
                print(f"Warnings ({len(report.warnings)}):")
                for warning in report.warnings:
                    print(f"  - {warning}")
            return 0
        else:
            print(f"\nValidation failed with {len(report.errors)} errors:")
            for error in report.errors:
                print(f"  - {error}")
            return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Validation failed")
        return 1


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="stop-timetables",
        description="Show scheduled departures from chosen GTFS stops",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Configuration directory (default: $XDG_CONFIG_HOME/stop-timetables)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Init command
    init_parser = subparsers.add_parser("init", help="Choose stops and build their schedules")
    init_parser.add_argument("--source", required=True, help="GTFS feed path or URL")
    init_parser.set_defaults(func=cmd_init)

    # Show command
    show_parser = subparsers.add_parser("show", help="Show departures of configured stops")
    show_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Query date as YYYY-MM-DD (default: today)",
    )
    show_parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=None,
        help="Maximum departures printed per stop (default: all)",
    )
    show_parser.add_argument(
        "--unknown-last",
        action="store_true",
        help="List departures without a known time after timed ones",
    )
    show_parser.set_defaults(func=cmd_show)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a GTFS feed")
    validate_parser.add_argument("--input", required=True, help="Path to GTFS directory or zip")
    validate_parser.set_defaults(func=cmd_validate)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
