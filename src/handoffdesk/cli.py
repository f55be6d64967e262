"""Command-line parsing for the HandoffDesk application."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from handoffdesk.headless import HeadlessOptions, HeadlessResult, execute_headless, parse_assignment


def parse_arguments(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse known CLI arguments and return ``(args, extras)``."""

    parser = argparse.ArgumentParser(description="HandoffDesk SBAR end-of-shift report generator")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the SBAR report without launching the GUI.",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Set a form field before formatting, e.g. patientName=Jane or fallRisk=yes (repeatable).",
    )
    parser.add_argument(
        "--output",
        dest="output",
        help="Also write the report TXT to this path (headless mode).",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default="debug",
        help="Directory for structured headless logs (default: debug).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Optional explicit log file path for headless runs.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug-level logging (headless mode).",
    )

    args, extras = parser.parse_known_args(argv)
    return args, extras


def create_headless_options(args: argparse.Namespace) -> HeadlessOptions:
    """Return ``HeadlessOptions`` derived from parsed ``args``."""

    if not args.headless:
        raise ValueError("create_headless_options called without --headless flag")

    assignments = [parse_assignment(raw) for raw in args.assignments]
    output = Path(args.output).expanduser() if args.output else None
    log_dir = Path(args.log_dir).expanduser()
    log_file = Path(args.log_file).expanduser() if args.log_file else None

    return HeadlessOptions(
        assignments=assignments,
        output=output,
        log_dir=log_dir,
        log_file=log_file,
        trace=bool(args.trace),
    )


def run_headless_from_args(args: argparse.Namespace) -> HeadlessResult:
    """Execute the headless run using ``args`` and return the result."""

    options = create_headless_options(args)
    return execute_headless(options)


__all__ = [
    "parse_arguments",
    "create_headless_options",
    "run_headless_from_args",
]
