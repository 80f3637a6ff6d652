# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Convert typed test rows to and from named table columns."""

import logging
from collections.abc import Mapping

from ttr import fields as f
from ttr.model import TestRow

logger = logging.getLogger(__name__)


def row_to_columns(row: TestRow) -> dict[str, str]:
    """Render a row as column values in registry order.

    Columns without a value are absent from the result rather than empty.
    History-derived columns only appear when ``row.git_info`` is set, and
    inline field annotations take precedence over them.

    Args:
        row: Typed test row.

    Returns:
        Column name to text mapping.
    """
    values: dict[str, object] = {
        f.TITLE: row.title,
        f.STEPS: row.steps,
        f.SECTION: row.section,
        f.SECTION_DEPTH: row.section_depth,
        f.SECTION_HIERARCHY: row.section_hierarchy,
    }
    if row.expected_result is not None:
        values[f.EXPECTED_RESULT] = row.expected_result
    if row.section_description is not None:
        values[f.SECTION_DESCRIPTION] = row.section_description
    if row.git_info is not None:
        values[f.CREATED_BY] = row.git_info.created.author
        values[f.CREATED_ON] = row.git_info.created.timestamp
        values[f.UPDATED_BY] = row.git_info.modified.author
        values[f.UPDATED_ON] = row.git_info.modified.timestamp
    for name, value in row.fields.items():
        if name in f.STRUCTURAL_FIELDS:
            continue
        values[name] = value

    return {
        name: f.format_value(name, values[name])
        for name in f.FIELD_NAMES
        if name in values
    }


def row_from_columns(columns: Mapping[str, str | None]) -> TestRow:
    """Build a typed row from one table record.

    Empty cells count as missing values. Unrecognized columns are kept in
    ``TestRow.extra``.

    Args:
        columns: Column name to cell text mapping.

    Returns:
        Typed test row.
    """
    recognized: dict[str, str] = {}
    extra: dict[str, str] = {}
    for raw_name, raw_value in columns.items():
        if raw_name is None:
            continue
        value = (raw_value or "").strip()
        name = f.canonical_name(raw_name)
        if name is None:
            extra[raw_name] = raw_value or ""
            continue
        if value:
            recognized[name] = raw_value or ""

    return TestRow(
        title=recognized.get(f.TITLE, "").strip(),
        steps=recognized.get(f.STEPS, ""),
        expected_result=recognized.get(f.EXPECTED_RESULT),
        section=recognized.get(f.SECTION, "").strip(),
        section_hierarchy=recognized.get(f.SECTION_HIERARCHY, "").strip(),
        section_depth=_parse_depth(recognized.get(f.SECTION_DEPTH)),
        section_description=recognized.get(f.SECTION_DESCRIPTION),
        fields={
            name: value.strip()
            for name, value in recognized.items()
            if name not in f.STRUCTURAL_FIELDS
        },
        extra=extra,
    )


def _parse_depth(value: str | None) -> int:
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric section depth (value={value!r})")
        return 0
