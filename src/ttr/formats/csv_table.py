# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CSV implementation of the table format."""

import csv
import logging
from pathlib import Path

from ttr.table import TableError

logger = logging.getLogger(__name__)


class CsvTable:
    """Read and write TestRail-style CSV files."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize format.

        Args:
            encoding: Text encoding used for writing. Reading also accepts a
                leading byte order mark.
        """
        self._encoding = encoding

    def read(self, table_file: Path) -> list[dict[str, str]]:
        """Read all records keyed by header column names.

        Args:
            table_file: CSV file path.

        Returns:
            One mapping per data row. Cells beyond the header are dropped.

        Raises:
            OSError: If the file cannot be read.
            TableError: If the file has no header or is not valid CSV.
        """
        read_encoding = (
            "utf-8-sig" if self._encoding.lower() == "utf-8" else self._encoding
        )
        with table_file.open("r", encoding=read_encoding, newline="") as handle:
            reader = csv.DictReader(handle)
            try:
                rows = [
                    {name: value for name, value in row.items() if name is not None}
                    for row in reader
                ]
            except csv.Error as exc:
                logger.warning(
                    f"Malformed CSV (table_file={table_file} line={reader.line_num} error={exc})"
                )
                raise TableError(f"{table_file}:{reader.line_num}: {exc}") from exc
            if reader.fieldnames is None:
                logger.warning(f"CSV file has no header (table_file={table_file})")
                raise TableError(f"{table_file}: missing header row")
        logger.info(f"Table read completed (table_file={table_file} rows={len(rows)})")
        return rows

    def write(
        self, table_file: Path, header: tuple[str, ...], rows: list[dict[str, str]]
    ) -> None:
        """Write records under a fixed header.

        Args:
            table_file: Target CSV file path.
            header: Column names in output order.
            rows: Records; missing columns are written empty.

        Raises:
            OSError: If directory creation or file writing fails.
        """
        table_file.parent.mkdir(parents=True, exist_ok=True)
        with table_file.open("w", encoding=self._encoding, newline="") as handle:
            writer = csv.DictWriter(
                handle,
                fieldnames=list(header),
                restval="",
                extrasaction="ignore",
                lineterminator="\n",
            )
            writer.writeheader()
            writer.writerows(rows)
        logger.info(f"Table write completed (table_file={table_file} rows={len(rows)})")
