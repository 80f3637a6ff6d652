# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Convert between a text test tree and a TestRail-style CSV file."""

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

from ttr.exporter import Exporter
from ttr.history import HistoryLookupError
from ttr.importer import Importer
from ttr.model import TranscodeOptions
from ttr.table import TableError

logger = logging.getLogger(__name__)


class UsageError(RuntimeError):
    """Raised when the given paths or options cannot drive a conversion."""


def configure_logging(level: int = logging.INFO) -> None:
    """Route log records to stderr through Rich.

    Stdout stays reserved for phase markers and the run summary.

    Args:
        level: Logging severity threshold.
    """
    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_path=False
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler])


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(prog="ttr")
    parser.add_argument("test_dir", help="Root directory of the text test tree.")
    parser.add_argument("table_file", help="CSV file to write (export) or read (import).")
    parser.add_argument(
        "--import",
        dest="import_mode",
        action="store_true",
        help="Import the CSV file into the test directory instead of exporting.",
    )
    parser.add_argument(
        "--git-footer",
        action="store_true",
        help="Append last-modification details to exported steps.",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Skip git history lookups on export.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Gitwildmatch pattern of test paths to skip on export (repeatable).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=8,
        help="Number of concurrent file readers/writers.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress informational logging.",
    )
    return parser


def log_level(argv: list[str]) -> int:
    """Resolve the logging threshold from the quiet flag.

    Args:
        argv: CLI arguments.

    Returns:
        ``WARNING`` when quiet output is requested, ``INFO`` otherwise.
    """
    quiet_parser = argparse.ArgumentParser(add_help=False)
    quiet_parser.add_argument("-q", "--quiet", action="store_true")
    known, _ = quiet_parser.parse_known_args(argv)
    return logging.WARNING if known.quiet else logging.INFO


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the conversion command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2

    try:
        options = _build_options(args)
        test_dir = Path(args.test_dir)
        table_file = Path(args.table_file)
        if args.import_mode:
            _validate_import(table_file=table_file)
        else:
            _validate_export(test_dir=test_dir)
    except UsageError as exc:
        logger.warning(f"Validation failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    phase = "import" if args.import_mode else "export"
    _print_phase(console, phase, "start")
    try:
        if args.import_mode:
            import_summary = Importer(options=options).import_table(
                table_file=table_file, output_root=test_dir
            )
            summary = asdict(import_summary)
        else:
            export_summary = Exporter(options=options).export(
                test_root=test_dir, table_file=table_file
            )
            summary = asdict(export_summary)
    except (OSError, UnicodeDecodeError, TableError, HistoryLookupError) as exc:
        logger.warning(f"{phase.capitalize()} failed (error={exc})")
        stderr.write(f"{phase.capitalize()} failed: {exc}\n")
        return 2
    _print_phase(console, phase, "done", summary=summary)
    console.print("status=success")
    return 0


def _build_options(args: argparse.Namespace) -> TranscodeOptions:
    """Build run options from parsed arguments.

    Raises:
        UsageError: If an option value is out of range.
    """
    if args.workers <= 0:
        raise UsageError("workers must be > 0")
    return TranscodeOptions(
        git_footer=args.git_footer,
        use_git=not args.no_git,
        max_workers=args.workers,
        exclude_patterns=tuple(args.exclude),
    )


def _validate_export(test_dir: Path) -> None:
    if not test_dir.exists():
        raise UsageError(f"Test directory does not exist: {test_dir}")
    if not test_dir.is_dir():
        raise UsageError(f"Test directory must be a directory: {test_dir}")


def _validate_import(table_file: Path) -> None:
    if not table_file.is_file():
        raise UsageError(f"Table file does not exist: {table_file}")


def _print_phase(
    console: Console, phase: str, state: str, summary: dict[str, int] | None = None
) -> None:
    """Print a phase marker, followed by the run counters once a phase is done."""
    console.print(f"{phase}:{state}")
    if summary:
        console.print(" ".join(f"{key}={value}" for key, value in summary.items()))


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging(level=log_level(sys.argv[1:]))
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
