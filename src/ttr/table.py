# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tabular file contracts."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class TableError(RuntimeError):
    """Represent an unreadable or malformed table file."""


class TableFormat(Protocol):
    """Define reading and writing of named-column table files."""

    def read(self, table_file: Path) -> list[dict[str, str]]:
        """Read all records keyed by header column names.

        Raises:
            OSError: If the file cannot be read.
            TableError: If the content is malformed.
        """

    def write(
        self, table_file: Path, header: tuple[str, ...], rows: list[dict[str, str]]
    ) -> None:
        """Write records under a fixed header; missing columns are empty.

        Raises:
            OSError: If the file cannot be written.
        """
