#!/usr/bin/env python3
"""Recurring session schedule tool.

Expands a recurrence pattern into dated sessions, recovers the pattern
behind stored sessions, and regenerates an edited schedule while keeping
one-off sessions. Results are printed as JSON or saved as .json / .ics.
"""

import argparse
import json
import logging
import sys
from typing import Any, Optional
from zoneinfo import ZoneInfoNotFoundError

from recurrence import (
    PatternGenerator,
    ScheduleReconciler,
    extract_schedule,
    format_date_range,
    format_schedule_summary,
    normalize_pattern,
    sessions_from_dicts,
)
from recurrence.formatting import format_session
from recurrence.models import SessionInstance
from transformer import BaseTransformer, ICalTransformer, JsonTransformer

logger = logging.getLogger("schedule2iCal")


def load_json(path: str) -> Any:
    """Load a JSON document from a file, or from stdin when path is '-'."""
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from None


def load_sessions(path: str) -> list[SessionInstance]:
    rows = load_json(path)
    if not isinstance(rows, list):
        raise ValueError(f"Expected a list of sessions in {path}")
    return sessions_from_dicts(rows)


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: '{value}'.")
    if number < 1:
        raise argparse.ArgumentTypeError("Value must be at least 1.")
    return number


def get_transformer(output_path: str, timezone: Optional[str]) -> BaseTransformer:
    """Pick the transformer matching the output file extension."""
    if output_path.lower().endswith(".ics"):
        return ICalTransformer(timezone=timezone)
    if output_path.lower().endswith(".json"):
        return JsonTransformer()
    raise ValueError(
        f"Unsupported output file '{output_path}'. Use a .ics or .json extension."
    )


def write_sessions(sessions: list[SessionInstance], args: argparse.Namespace) -> None:
    """Save sessions to the requested output file, or print them as JSON."""
    if args.output:
        transformer = get_transformer(args.output, args.timezone)
        transformer.transform(sessions, args.calendar_name)
        transformer.save(args.output)
        print(f"Schedule saved to: {args.output}", file=sys.stderr)
    else:
        transformer = JsonTransformer()
        transformer.transform(sessions)
        print(transformer.dumps())


def print_preview(sessions: list[SessionInstance]) -> None:
    for session in sessions:
        print(f"  {format_session(session)}", file=sys.stderr)


def run_preview(args: argparse.Namespace) -> None:
    pattern = normalize_pattern(load_json(args.pattern))
    sessions = PatternGenerator(args.max_sessions).generate(pattern)

    print(format_schedule_summary(pattern), file=sys.stderr)
    print(f"Period: {format_date_range(pattern.start_date, pattern.end_date)}", file=sys.stderr)
    print(f"{len(sessions)} sessions will be created.", file=sys.stderr)
    if not sessions:
        print("Warning: No sessions match the selected days in this date range.", file=sys.stderr)
    print_preview(sessions)

    write_sessions(sessions, args)


def run_extract(args: argparse.Namespace) -> None:
    sessions = load_sessions(args.sessions)
    schedule = extract_schedule(sessions)

    print(format_schedule_summary(schedule), file=sys.stderr)
    if schedule.has_schedule:
        print(
            f"Period: {format_date_range(schedule.start_date, schedule.end_date)}",
            file=sys.stderr,
        )
    one_offs = sum(1 for session in sessions if session.is_one_off)
    if one_offs:
        print(f"{one_offs} one-off sessions are not part of the pattern.", file=sys.stderr)

    print(json.dumps(schedule.to_dict(), indent=2, ensure_ascii=False))


def run_reconcile(args: argparse.Namespace) -> None:
    existing = load_sessions(args.sessions)
    pattern = normalize_pattern(load_json(args.pattern))
    reconciler = ScheduleReconciler(PatternGenerator(args.max_sessions))
    sessions = reconciler.reconcile(existing, pattern)

    print(format_schedule_summary(pattern), file=sys.stderr)
    print(
        f"{len(existing)} stored sessions replaced by {len(sessions)} sessions.",
        file=sys.stderr,
    )
    print_preview(sessions)

    write_sessions(sessions, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate, extract and reconcile recurring session schedules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 schedule2iCal.py preview pattern.json -o classes.ics
  python3 schedule2iCal.py extract sessions.json
  python3 schedule2iCal.py reconcile sessions.json pattern.json -o sessions.json
        """
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path, .ics or .json (default: JSON on stdout)"
    )
    output_options.add_argument(
        "--calendar-name",
        default="Schedule",
        help="Calendar name used in .ics output (default: Schedule)"
    )
    output_options.add_argument(
        "--timezone",
        default=None,
        help="IANA timezone for .ics output, e.g. America/Denver "
             "(default: floating local time)"
    )
    output_options.add_argument(
        "--max-sessions",
        type=positive_int,
        default=PatternGenerator.MAX_INSTANCES,
        help=f"Refuse patterns generating more sessions than this "
             f"(default: {PatternGenerator.MAX_INSTANCES})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser(
        "preview",
        parents=[output_options],
        help="Generate sessions from a recurrence pattern"
    )
    preview.add_argument("pattern", help="Pattern JSON file ('-' for stdin)")
    preview.set_defaults(handler=run_preview)

    extract = subparsers.add_parser(
        "extract",
        help="Recover the recurrence pattern behind stored sessions"
    )
    extract.add_argument("sessions", help="Sessions JSON file ('-' for stdin)")
    extract.set_defaults(handler=run_extract)

    reconcile = subparsers.add_parser(
        "reconcile",
        parents=[output_options],
        help="Regenerate stored sessions from an edited pattern, keeping one-offs"
    )
    reconcile.add_argument("sessions", help="Stored sessions JSON file")
    reconcile.add_argument("pattern", help="Edited pattern JSON file")
    reconcile.set_defaults(handler=run_reconcile)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the command-line tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.handler(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except ZoneInfoNotFoundError:
        print(f"Error: Unknown timezone '{args.timezone}'.", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
