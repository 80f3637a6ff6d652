# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Registry of recognized TestRail fields and their value transforms."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y %I:%M %p"

ID = "ID"
TITLE = "Title"
CREATED_BY = "Created By"
CREATED_ON = "Created On"
ESTIMATE = "Estimate"
EXPECTED_RESULT = "Expected Result"
FORECAST = "Forecast"
MILESTONE = "Milestone"
PRIORITY = "Priority"
REFERENCES = "References"
SECTION = "Section"
SECTION_DEPTH = "Section Depth"
SECTION_DESCRIPTION = "Section Description"
SECTION_HIERARCHY = "Section Hierarchy"
STEPS = "Steps"
SUITE = "Suite"
SUITE_ID = "Suite ID"
TYPE = "Type"
UPDATED_BY = "Updated By"
UPDATED_ON = "Updated On"


def _as_text(value: object) -> str:
    return str(value)


def _as_date(value: object) -> str:
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    return str(value)


def _as_depth(value: object) -> str:
    return str(int(value))  # type: ignore[call-overload]


@dataclass(frozen=True)
class FieldSpec:
    """Describe one recognized field.

    Attributes:
        name: Canonical column name.
        transform: Converts a raw value into its column text.
        inline: Whether ``Name: value`` lines are recognized in test text.
        persisted: Whether the field is written back into test text on import.
    """

    name: str
    transform: Callable[[object], str] = _as_text
    inline: bool = True
    persisted: bool = False

    @property
    def pattern(self) -> re.Pattern[str]:
        """Return the inline annotation pattern for this field."""
        return _annotation_pattern(self.name)


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(ID, persisted=True),
    FieldSpec(TITLE, inline=False),
    FieldSpec(CREATED_BY, persisted=True),
    FieldSpec(CREATED_ON, transform=_as_date, persisted=True),
    FieldSpec(ESTIMATE),
    FieldSpec(EXPECTED_RESULT),
    FieldSpec(FORECAST),
    FieldSpec(MILESTONE),
    FieldSpec(PRIORITY, persisted=True),
    FieldSpec(REFERENCES, persisted=True),
    FieldSpec(SECTION, inline=False),
    FieldSpec(SECTION_DEPTH, transform=_as_depth, inline=False),
    FieldSpec(SECTION_DESCRIPTION, inline=False),
    FieldSpec(SECTION_HIERARCHY, inline=False),
    FieldSpec(STEPS),
    FieldSpec(SUITE, persisted=True),
    FieldSpec(SUITE_ID, persisted=True),
    FieldSpec(TYPE, persisted=True),
    FieldSpec(UPDATED_BY),
    FieldSpec(UPDATED_ON, transform=_as_date),
)

FIELD_NAMES: tuple[str, ...] = tuple(spec.name for spec in FIELDS)
PERSISTED_FIELDS: tuple[str, ...] = tuple(
    spec.name for spec in FIELDS if spec.persisted
)
INLINE_FIELDS: tuple[FieldSpec, ...] = tuple(spec for spec in FIELDS if spec.inline)

# Columns carried by dedicated TestRow attributes rather than the field map.
STRUCTURAL_FIELDS: frozenset[str] = frozenset(
    {
        TITLE,
        STEPS,
        EXPECTED_RESULT,
        SECTION,
        SECTION_DEPTH,
        SECTION_DESCRIPTION,
        SECTION_HIERARCHY,
    }
)

_SPECS_BY_NAME: dict[str, FieldSpec] = {spec.name: spec for spec in FIELDS}
_CANONICAL_BY_KEY: dict[str, str] = {
    " ".join(spec.name.lower().split()): spec.name for spec in FIELDS
}


def _annotation_pattern(name: str) -> re.Pattern[str]:
    """Build the case-insensitive ``Name: value`` line pattern.

    Args:
        name: Canonical field name.

    Returns:
        Compiled pattern capturing the trailing value in group 1.
    """
    words = r"\s+".join(re.escape(word) for word in name.split())
    return re.compile(rf"^\s*{words}\s*:\s*(.*?)\s*$", re.IGNORECASE)


def canonical_name(text: str) -> str | None:
    """Resolve a column or annotation name to its canonical field name.

    Args:
        text: Name as written, in any case and spacing.

    Returns:
        Canonical field name, or ``None`` when unrecognized.
    """
    return _CANONICAL_BY_KEY.get(" ".join(text.lower().split()))


def is_persisted(name: str) -> bool:
    """Check whether a field survives an import round trip."""
    return name in PERSISTED_FIELDS


def format_value(name: str, value: object) -> str:
    """Convert a raw field value into column text.

    Args:
        name: Canonical field name.
        value: Raw value (string, ``datetime`` or ``int``).

    Returns:
        Column text after the field's transform.

    Raises:
        KeyError: If ``name`` is not a recognized field.
    """
    return _SPECS_BY_NAME[name].transform(value)
