# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Import a table file into a test directory tree."""

import concurrent.futures
import logging
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ttr.columns import row_from_columns
from ttr.formats import CsvTable
from ttr.model import TestRow, TranscodeOptions
from ttr.section_path import to_local_path
from ttr.serializer import SerializedTest, serialize_row
from ttr.table import TableFormat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryPlan:
    """Represent all test files targeting one directory.

    Attributes:
        directory: Root-relative POSIX directory path; ``""`` for the root.
        section_description: Description taken from the first row mapped here.
        tests: Serialized tests in table order, one per distinct path.
    """

    directory: str
    section_description: str
    tests: list[SerializedTest]


@dataclass(frozen=True)
class ImportSummary:
    """Represent import run counters."""

    rows_read: int
    directories_written: int
    files_written: int
    elapsed_ms: int


class Importer:
    """Write table rows out as test files grouped by section directory."""

    def __init__(
        self,
        options: TranscodeOptions | None = None,
        table_format: TableFormat | None = None,
    ) -> None:
        """Initialize import service.

        Args:
            options: Run configuration.
            table_format: Table reader, CSV by default.
        """
        self._options = options or TranscodeOptions()
        self._table_format = table_format or CsvTable()

    def plan(self, rows: list[TestRow]) -> list[DirectoryPlan]:
        """Group serialized rows by target directory.

        Args:
            rows: Typed rows in table order.

        Returns:
            Directory plans sorted lexicographically by directory path.
        """
        grouped: dict[str, dict[str, SerializedTest]] = {}
        descriptions: dict[str, str] = {}
        for row in rows:
            serialized = serialize_row(row, suffix=self._options.suffix)
            parent = PurePosixPath(serialized.relative_path).parent.as_posix()
            directory = "" if parent == "." else parent
            if directory not in grouped:
                grouped[directory] = {}
                descriptions[directory] = row.section_description or ""
            # Colliding sanitized paths: the later row wins.
            grouped[directory][serialized.relative_path] = serialized

        return [
            DirectoryPlan(
                directory=directory,
                section_description=descriptions[directory],
                tests=list(grouped[directory].values()),
            )
            for directory in sorted(grouped)
        ]

    def import_rows(self, rows: list[TestRow], output_root: Path) -> ImportSummary:
        """Write rows as test files beneath an output root.

        Directories are handled one at a time in sorted order. Each directory
        is created and receives its section description file before its test
        files are written concurrently.

        Args:
            rows: Typed rows in table order.
            output_root: Root directory of the generated test tree.

        Returns:
            Import counters.

        Raises:
            OSError: If creating a directory or writing a file fails.
        """
        started = time.monotonic()
        plans = self.plan(rows)
        files_written = 0
        for plan in plans:
            files_written += self._write_directory(plan, output_root)
        elapsed_ms = int(round((time.monotonic() - started) * 1000))
        summary = ImportSummary(
            rows_read=len(rows),
            directories_written=len(plans),
            files_written=files_written,
            elapsed_ms=elapsed_ms,
        )
        logger.info(
            f"Import completed (output_root={output_root} rows={summary.rows_read} "
            f"directories={summary.directories_written} files={summary.files_written})"
        )
        return summary

    def import_table(self, table_file: Path, output_root: Path) -> ImportSummary:
        """Read a table file and write its rows as test files.

        Args:
            table_file: Input table file path.
            output_root: Root directory of the generated test tree.

        Returns:
            Import counters.

        Raises:
            OSError: If reading the table or writing files fails.
            TableError: If the table is malformed.
        """
        records = self._table_format.read(table_file)
        rows = [row_from_columns(record) for record in records]
        return self.import_rows(rows, output_root)

    def _write_directory(self, plan: DirectoryPlan, output_root: Path) -> int:
        """Create one directory, then write its description and tests."""
        directory = output_root / to_local_path(plan.directory)
        directory.mkdir(parents=True, exist_ok=True)
        (directory / self._options.description_file).write_text(
            plan.section_description.strip(), encoding="utf-8"
        )
        logger.info(
            f"Writing section (directory={plan.directory or '.'} tests={len(plan.tests)})"
        )

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._options.max_workers
        ) as executor:
            futures = [
                executor.submit(_write_test, output_root, test) for test in plan.tests
            ]
            try:
                for future in concurrent.futures.as_completed(futures):
                    future.result()
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise
        return len(plan.tests)


def _write_test(output_root: Path, test: SerializedTest) -> None:
    path = output_root / to_local_path(test.relative_path)
    path.write_text(test.content, encoding="utf-8")
    logger.debug(f"Wrote test file (path={path})")
