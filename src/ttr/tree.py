# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Discover test files beneath a test root."""

import logging
from dataclasses import dataclass
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"


@dataclass(frozen=True)
class SkipRules:
    """Decide which test-tree entries the export walk leaves out.

    Attributes:
        gitignore: Rules collected from ``.gitignore`` files in the tree.
        excludes: Rules given on the command line.
    """

    gitignore: pathspec.GitIgnoreSpec
    excludes: pathspec.GitIgnoreSpec

    @classmethod
    def for_test_tree(
        cls, test_root: Path, exclude_patterns: tuple[str, ...] = ()
    ) -> "SkipRules":
        """Collect skip rules for one test tree.

        Every ``.gitignore`` below the root is rescoped to the root so a
        single pathspec can answer for any root-relative path.

        Raises:
            OSError: If a .gitignore file cannot be read.
            UnicodeDecodeError: If a .gitignore file is not valid UTF-8.
        """
        scoped: list[str] = []
        for ignore_file in sorted(test_root.rglob(GITIGNORE_FILE)):
            scope = ignore_file.parent.relative_to(test_root).as_posix()
            text = ignore_file.read_text(encoding="utf-8")
            scoped.extend(
                _scope_pattern(pattern, "" if scope == "." else scope)
                for pattern in text.splitlines()
            )
        logger.debug(
            f"Skip rules loaded (test_root={test_root} gitignore_lines={len(scoped)} "
            f"excludes={len(exclude_patterns)})"
        )
        return cls(
            gitignore=pathspec.GitIgnoreSpec.from_lines(scoped),
            excludes=pathspec.GitIgnoreSpec.from_lines(exclude_patterns),
        )

    def skips(self, entry: str, is_dir: bool) -> bool:
        """Tell whether a root-relative POSIX entry is left out of the walk."""
        if not entry:
            return False
        candidates = (entry, f"{entry}/") if is_dir else (entry,)
        return any(
            spec.match_file(candidate)
            for spec in (self.gitignore, self.excludes)
            for candidate in candidates
        )


def discover_test_files(
    test_root: Path, suffix: str, rules: SkipRules | None = None
) -> list[Path]:
    """Walk the test root and collect test files.

    ``.git`` directories are never entered.

    Args:
        test_root: Root directory of the test tree.
        suffix: File name suffix identifying test files.
        rules: Optional skip rules for ignored and excluded entries.

    Returns:
        Test file paths sorted by their root-relative POSIX path.

    Raises:
        OSError: If a directory cannot be listed.
    """
    found: list[Path] = []
    skipped = 0
    queue: list[Path] = [test_root]
    while queue:
        current = queue.pop(0)
        for child in sorted(current.iterdir(), key=lambda item: item.name):
            relative = child.relative_to(test_root).as_posix()
            is_dir = child.is_dir()
            if is_dir and child.name == ".git":
                continue
            if rules is not None and rules.skips(relative, is_dir=is_dir):
                skipped += 1
                continue
            if is_dir:
                queue.append(child)
            elif child.name.endswith(suffix):
                found.append(child)

    logger.info(
        f"Test discovery completed (test_root={test_root} tests={len(found)} skipped={skipped})"
    )
    return sorted(found, key=lambda item: item.relative_to(test_root).as_posix())


def _scope_pattern(pattern: str, scope: str) -> str:
    """Rewrite a pattern from a nested .gitignore relative to the test root."""
    if not scope or not pattern.strip() or pattern.lstrip().startswith("#"):
        return pattern
    if pattern.startswith((r"\!", r"\#")):
        return pattern
    negate = "!" if pattern.startswith("!") else ""
    body = pattern[len(negate):]
    anchor = "/" if body.startswith("/") else ""
    body = body.lstrip("/")
    return f"{negate}{anchor}{scope}/{body}" if body else f"{negate}{anchor}{scope}"
