# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Export a test directory tree into a table file."""

import concurrent.futures
import logging
import time
from dataclasses import dataclass
from pathlib import Path

from ttr.columns import row_to_columns
from ttr.fields import FIELD_NAMES
from ttr.formats import CsvTable
from ttr.history import HistoryProvider
from ttr.model import TestRow, TranscodeOptions
from ttr.parser import build_row
from ttr.section_path import section_info
from ttr.table import TableFormat
from ttr.tree import SkipRules, discover_test_files
from ttr.vcs import GitHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportSummary:
    """Represent export run counters."""

    tests_exported: int
    tests_with_history: int
    elapsed_ms: int


class Exporter:
    """Parse every test file beneath a root into table rows."""

    def __init__(
        self,
        options: TranscodeOptions | None = None,
        history: HistoryProvider | None = None,
        table_format: TableFormat | None = None,
    ) -> None:
        """Initialize export service.

        Args:
            options: Run configuration.
            history: History provider. Defaults to git when
                ``options.use_git`` is set, otherwise no lookups are made.
            table_format: Table writer, CSV by default.
        """
        self._options = options or TranscodeOptions()
        if history is None and self._options.use_git:
            history = GitHistory()
        self._history = history
        self._table_format = table_format or CsvTable()

    def collect(self, test_root: Path) -> list[TestRow]:
        """Read and parse all test files concurrently.

        Args:
            test_root: Root directory of the test tree.

        Returns:
            Rows sorted by root-relative source path.

        Raises:
            OSError: If any file cannot be read; pending reads are cancelled.
            HistoryLookupError: If a history lookup fails unexpectedly.
        """
        rules = SkipRules.for_test_tree(
            test_root, exclude_patterns=self._options.exclude_patterns
        )
        files = discover_test_files(test_root, suffix=self._options.suffix, rules=rules)
        rows: list[TestRow] = []
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._options.max_workers
        ) as executor:
            futures = [
                executor.submit(self._load_row, file_path, test_root)
                for file_path in files
            ]
            try:
                for future in concurrent.futures.as_completed(futures):
                    rows.append(future.result())
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return sorted(rows, key=lambda row: row.source_path or "")

    def export(self, test_root: Path, table_file: Path) -> ExportSummary:
        """Export a test tree into a table file.

        Args:
            test_root: Root directory of the test tree.
            table_file: Output table file path.

        Returns:
            Export counters.

        Raises:
            OSError: If reading tests or writing the table fails.
            HistoryLookupError: If a history lookup fails unexpectedly.
        """
        started = time.monotonic()
        rows = self.collect(test_root)
        self._table_format.write(
            table_file, header=FIELD_NAMES, rows=[row_to_columns(row) for row in rows]
        )
        elapsed_ms = int(round((time.monotonic() - started) * 1000))
        summary = ExportSummary(
            tests_exported=len(rows),
            tests_with_history=sum(1 for row in rows if row.git_info is not None),
            elapsed_ms=elapsed_ms,
        )
        logger.info(
            f"Export completed (test_root={test_root} table_file={table_file} "
            f"tests={summary.tests_exported} with_history={summary.tests_with_history})"
        )
        return summary

    def _load_row(self, file_path: Path, test_root: Path) -> TestRow:
        """Read one test file with its description and history into a row."""
        content = file_path.read_text(encoding="utf-8")
        git_info = (
            self._history.lookup(file_path) if self._history is not None else None
        )
        logger.debug(f"Read test file (file_path={file_path} history={git_info is not None})")
        return build_row(
            text=content,
            relative_path=file_path.relative_to(test_root),
            section=section_info(file_path, test_root),
            suffix=self._options.suffix,
            git_info=git_info,
            section_description=self._read_description(file_path.parent),
            with_git_footer=self._options.git_footer,
        )

    def _read_description(self, directory: Path) -> str | None:
        description_path = directory / self._options.description_file
        if not description_path.is_file():
            return None
        return description_path.read_text(encoding="utf-8").strip()
