# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the conversion CLI."""

import io
import logging
from pathlib import Path
from typing import Callable

from cli.ttr_cli import log_level, run

WriteFile = Callable[[Path, str], Path]


def test_cli_001_requires_positional_arguments() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=stderr)

    assert exit_code == 2


def test_cli_002_export_fails_when_test_dir_is_missing(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [str(tmp_path / "missing"), str(tmp_path / "out.csv")],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Test directory does not exist" in stderr.getvalue()


def test_cli_003_import_fails_when_table_is_missing(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [str(tmp_path / "tests"), str(tmp_path / "missing.csv"), "--import"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Table file does not exist" in stderr.getvalue()


def test_cli_004_rejects_non_positive_workers(tmp_path: Path) -> None:
    stderr = io.StringIO()

    exit_code = run(
        [str(tmp_path), str(tmp_path / "out.csv"), "--workers", "0"],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "workers must be > 0" in stderr.getvalue()


def test_cli_005_export_then_import_round_trip(
    tmp_path: Path, write_file: WriteFile
) -> None:
    test_dir = tmp_path / "tests"
    write_file(test_dir / "auth" / "Login.test.txt", "Open app\nPriority: High\n")
    table_file = tmp_path / "cases.csv"
    stdout = io.StringIO()

    export_code = run(
        [str(test_dir), str(table_file), "--no-git", "--quiet"],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    assert export_code == 0
    output = stdout.getvalue()
    assert "export:start" in output
    assert "export:done" in output
    assert "tests_exported=1" in output
    assert "status=success" in output
    assert table_file.exists()

    import_root = tmp_path / "imported"
    import_stdout = io.StringIO()
    import_code = run(
        [str(import_root), str(table_file), "--import"],
        stdout=import_stdout,
        stderr=io.StringIO(),
    )

    assert import_code == 0
    assert "files_written=1" in import_stdout.getvalue()
    content = (import_root / "auth" / "Login.test.txt").read_text(encoding="utf-8")
    assert content == "Open app\n\nPriority: High\n"


def test_cli_006_import_reports_malformed_table(tmp_path: Path) -> None:
    table_file = tmp_path / "empty.csv"
    table_file.write_text("", encoding="utf-8")
    stderr = io.StringIO()

    exit_code = run(
        [str(tmp_path / "out"), str(table_file), "--import"],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Import failed" in stderr.getvalue()


def test_cli_007_quiet_flag_raises_log_threshold() -> None:
    assert log_level(["tests", "out.csv", "--quiet"]) == logging.WARNING
    assert log_level(["tests", "out.csv", "-q"]) == logging.WARNING
    assert log_level(["tests", "out.csv"]) == logging.INFO
