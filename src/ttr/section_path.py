# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Map test file paths to section hierarchies and back."""

import logging
import re
from pathlib import Path, PurePath, PurePosixPath

from ttr.model import SectionInfo

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = " > "
MAX_TITLE_LENGTH = 200
INERT_CHARACTER = "_"

_RAW_SEPARATORS = re.compile(r"[/\\]")
_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9/]")


def _relative_parent_parts(file_path: PurePath, test_root: PurePath) -> tuple[str, ...]:
    """Return the directory segments between the root and the file's parent.

    Args:
        file_path: Test file path, absolute or root-relative.
        test_root: Test root directory.

    Returns:
        Parent directory segments relative to the root.
    """
    try:
        relative = file_path.relative_to(test_root)
    except ValueError:
        relative = file_path
    parts = relative.parent.parts
    if relative.anchor:
        parts = parts[1:]
    return tuple(part for part in parts if part not in ("", "."))


def path_to_section(file_path: str | PurePath, test_root: str | PurePath) -> str:
    """Derive the section hierarchy label of a test file.

    Args:
        file_path: Test file path.
        test_root: Root directory of the test tree.

    Returns:
        Parent directories joined with ``" > "``; empty at the root.
    """
    return SECTION_SEPARATOR.join(
        _relative_parent_parts(PurePath(file_path), PurePath(test_root))
    )


def section_info(file_path: str | PurePath, test_root: str | PurePath) -> SectionInfo:
    """Derive section, hierarchy and depth of a test file.

    Args:
        file_path: Test file path.
        test_root: Root directory of the test tree.

    Returns:
        Section placement of the file.
    """
    parts = _relative_parent_parts(PurePath(file_path), PurePath(test_root))
    return SectionInfo(
        section=parts[-1] if parts else "",
        hierarchy=SECTION_SEPARATOR.join(parts),
        depth=len(parts),
    )


def resolve_section(section_hierarchy: str | None, section: str | None) -> str:
    """Pick the hierarchy when present, falling back to the single section."""
    if section_hierarchy:
        return section_hierarchy
    return section or ""


def section_to_path(section: str | None, title: str) -> str:
    """Build a sanitized root-relative path for a test.

    Every character outside ``[A-Za-z0-9]`` and ``/`` becomes ``_``, so
    distinct titles may collapse to one path. Empty section segments are
    dropped, so the result never starts with ``/``.

    Args:
        section: Section hierarchy (or single section) label.
        title: Test title.

    Returns:
        POSIX relative path without the test suffix.
    """
    section_path = ""
    if section:
        inert = _RAW_SEPARATORS.sub(INERT_CHARACTER, section)
        segments = inert.replace(SECTION_SEPARATOR, "/").split("/")
        section_path = "/".join(segment for segment in segments if segment)
    name = _RAW_SEPARATORS.sub(INERT_CHARACTER, title[:MAX_TITLE_LENGTH])
    joined = f"{section_path}/{name}" if section_path else name
    return _UNSAFE_CHARACTERS.sub("_", joined)


def to_local_path(relative_path: str) -> Path:
    """Convert a sanitized POSIX relative path to a native path.

    Raises:
        ValueError: If the path is anchored or climbs out of its root.
    """
    posix = PurePosixPath(relative_path)
    if posix.anchor or ".." in posix.parts:
        raise ValueError(f"Expected a root-relative path: {relative_path}")
    return Path(*posix.parts)
