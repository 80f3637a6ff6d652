# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Table file formats."""

from ttr.formats.csv_table import CsvTable

__all__ = ["CsvTable"]
