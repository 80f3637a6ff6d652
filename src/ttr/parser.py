# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parse free-form test text into structured rows.

Each line is classified against the inline field patterns and fed through a
small state machine. The active mode is either ``STEP`` or ``RESULT``; a
recognized field line is a one-line ``FIELD`` state that stores its value and
leaves the mode untouched.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath

from ttr.fields import EXPECTED_RESULT, INLINE_FIELDS, STEPS, UPDATED_ON, format_value
from ttr.model import GitInfo, SectionInfo, TestRow

logger = logging.getLogger(__name__)


class LineState(Enum):
    """State assigned to one parsed line."""

    STEP = "step"
    RESULT = "result"
    FIELD = "field"


class LineKind(Enum):
    """Classification of one raw line."""

    STEPS_MARKER = "steps_marker"
    RESULT_MARKER = "result_marker"
    FIELD = "field"
    TEXT = "text"


# (mode, line kind) -> (state of this line, mode for the next line)
_TRANSITIONS: dict[tuple[LineState, LineKind], tuple[LineState, LineState]] = {
    (LineState.STEP, LineKind.STEPS_MARKER): (LineState.STEP, LineState.STEP),
    (LineState.STEP, LineKind.RESULT_MARKER): (LineState.RESULT, LineState.RESULT),
    (LineState.STEP, LineKind.FIELD): (LineState.FIELD, LineState.STEP),
    (LineState.STEP, LineKind.TEXT): (LineState.STEP, LineState.STEP),
    (LineState.RESULT, LineKind.STEPS_MARKER): (LineState.FIELD, LineState.RESULT),
    (LineState.RESULT, LineKind.RESULT_MARKER): (LineState.RESULT, LineState.RESULT),
    (LineState.RESULT, LineKind.FIELD): (LineState.FIELD, LineState.RESULT),
    (LineState.RESULT, LineKind.TEXT): (LineState.RESULT, LineState.RESULT),
}

_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (spec.name, spec.pattern) for spec in INLINE_FIELDS
)


@dataclass(frozen=True)
class ParsedContent:
    """Represent the structured content of one test file.

    Attributes:
        steps: Step text, stripped.
        expected_result: Result text, stripped; ``None`` when empty.
        fields: Inline field annotations keyed by canonical name.
    """

    steps: str
    expected_result: str | None
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ClassifiedLine:
    """Represent one classified line.

    Attributes:
        kind: Line classification.
        name: Matched field name; ``None`` for plain text.
        value: Captured annotation value, or the raw line for plain text.
    """

    kind: LineKind
    name: str | None
    value: str


def classify_line(line: str) -> ClassifiedLine:
    """Classify one line against the inline field patterns, first match wins."""
    for name, pattern in _PATTERNS:
        match = pattern.match(line)
        if match is None:
            continue
        value = match.group(1)
        if name == EXPECTED_RESULT:
            return ClassifiedLine(LineKind.RESULT_MARKER, name, value)
        if name == STEPS:
            return ClassifiedLine(LineKind.STEPS_MARKER, name, value)
        return ClassifiedLine(LineKind.FIELD, name, value)
    return ClassifiedLine(LineKind.TEXT, None, line)


def parse_content(text: str) -> ParsedContent:
    """Split test text into steps, expected result and inline fields.

    Args:
        text: Raw test file content.

    Returns:
        Parsed content with field lines removed from steps and result.
    """
    steps: list[str] = []
    result: list[str] = []
    fields: dict[str, str] = {}
    mode = LineState.STEP

    for line in text.splitlines():
        classified = classify_line(line)
        state, mode = _TRANSITIONS[(mode, classified.kind)]
        if state is LineState.FIELD:
            if classified.kind is LineKind.STEPS_MARKER:
                # Steps never reopen once the result has started.
                logger.warning(
                    f"Ignoring steps marker inside expected result (content={classified.value!r})"
                )
                continue
            fields[classified.name or ""] = classified.value
            continue
        target = steps if state is LineState.STEP else result
        if classified.kind is LineKind.TEXT or classified.value:
            target.append(classified.value)

    expected_result = "\n".join(result).strip()
    return ParsedContent(
        steps="\n".join(steps).strip(),
        expected_result=expected_result or None,
        fields=fields,
    )


def title_from_filename(file_name: str, suffix: str) -> str:
    """Strip the test suffix from a file name.

    Args:
        file_name: Base name of the test file.
        suffix: Test file suffix, e.g. ``.test.txt``.

    Returns:
        Test title.
    """
    if suffix and file_name.endswith(suffix):
        return file_name[: -len(suffix)]
    return file_name


def git_footer(git_info: GitInfo) -> str:
    """Render the human-readable last-modification footer."""
    modified = git_info.modified
    return (
        f"Last modified by {modified.author} on "
        f"{format_value(UPDATED_ON, modified.timestamp)}"
    )


def build_row(
    text: str,
    relative_path: str | PurePath,
    section: SectionInfo,
    suffix: str,
    git_info: GitInfo | None = None,
    section_description: str | None = None,
    with_git_footer: bool = False,
) -> TestRow:
    """Parse one test file into a row.

    Args:
        text: Raw test file content.
        relative_path: Root-relative path of the test file.
        section: Section placement derived from the path.
        suffix: Test file suffix.
        git_info: Version-control history, when available.
        section_description: Description of the containing section.
        with_git_footer: Append the last-modification footer to the steps.

    Returns:
        Structured test row.
    """
    path = PurePath(relative_path)
    parsed = parse_content(text)
    steps = parsed.steps
    if with_git_footer and git_info is not None:
        footer = git_footer(git_info)
        steps = f"{steps}\n\n{footer}" if steps else footer
    return TestRow(
        title=title_from_filename(path.name, suffix),
        steps=steps,
        expected_result=parsed.expected_result,
        section=section.section,
        section_hierarchy=section.hierarchy,
        section_depth=section.depth,
        section_description=section_description,
        fields=dict(parsed.fields),
        git_info=git_info,
        source_path=path.as_posix(),
    )
