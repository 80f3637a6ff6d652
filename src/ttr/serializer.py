# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Serialize structured rows into test file paths and text."""

import logging
import re
from dataclasses import dataclass

from ttr.fields import EXPECTED_RESULT, PERSISTED_FIELDS
from ttr.model import DEFAULT_TEST_SUFFIX, TestRow
from ttr.section_path import resolve_section, section_to_path

logger = logging.getLogger(__name__)

_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_LINE_BREAKS = re.compile(r"\r\n?|\n")


@dataclass(frozen=True)
class SerializedTest:
    """Represent one serialized test file.

    Attributes:
        relative_path: POSIX path relative to the test root, suffix included.
        content: Full file text.
    """

    relative_path: str
    content: str


def collapse_whitespace(text: str) -> str:
    """Collapse runs of horizontal whitespace into single spaces.

    Args:
        text: Cell text, possibly with ``\\r\\n`` line endings.

    Returns:
        Text with ``\\n`` line endings and collapsed spacing, stripped.
    """
    normalized = _LINE_BREAKS.sub("\n", text)
    return _HORIZONTAL_WHITESPACE.sub(" ", normalized).strip()


def serialize_content(row: TestRow) -> str:
    """Build the test file text for a row.

    Args:
        row: Typed test row.

    Returns:
        Steps, optional expected result block and persisted field lines.
    """
    parts = [collapse_whitespace(row.steps), "\n\n"]
    expected_result = collapse_whitespace(row.expected_result or "")
    if expected_result:
        parts.append(f"{EXPECTED_RESULT}:\n{expected_result}\n\n")
    for name in PERSISTED_FIELDS:
        value = row.fields.get(name)
        if value is None:
            continue
        parts.append(f"{name}: {' '.join(value.split())}\n")
    return "".join(parts)


def serialize_row(row: TestRow, suffix: str = DEFAULT_TEST_SUFFIX) -> SerializedTest:
    """Compute the target path and text of a row without touching disk.

    Args:
        row: Typed test row.
        suffix: Test file suffix appended to the sanitized title.

    Returns:
        Relative path and file content.
    """
    section = resolve_section(row.section_hierarchy, row.section)
    relative_path = f"{section_to_path(section, row.title)}{suffix}"
    return SerializedTest(relative_path=relative_path, content=serialize_content(row))
