# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""History lookup backed by the git command line."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

from ttr.history import HistoryLookupError
from ttr.model import CommitInfo, GitInfo

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = "\x1f"
_LOG_FORMAT = "--format=%an%x1f%ae%x1f%aI"


class GitHistory:
    """Look up file history by running ``git log`` next to the file."""

    def __init__(self, git_executable: str = "git") -> None:
        """Initialize provider.

        Args:
            git_executable: Name or path of the git binary.
        """
        self._git_executable = git_executable
        self._git_missing = False

    def lookup(self, file_path: Path) -> GitInfo | None:
        """Look up the first-add and latest commits of a file.

        Args:
            file_path: Absolute test file path.

        Returns:
            History metadata, or ``None`` when git is unavailable, the file is
            outside a repository, or it has no commits.

        Raises:
            HistoryLookupError: If git output cannot be parsed.
        """
        if self._git_missing:
            return None
        try:
            completed = subprocess.run(
                [
                    self._git_executable,
                    "log",
                    "--follow",
                    _LOG_FORMAT,
                    "--",
                    file_path.name,
                ],
                cwd=file_path.parent,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except FileNotFoundError:
            logger.warning(
                f"Git executable not found; history lookup disabled (git={self._git_executable})"
            )
            self._git_missing = True
            return None

        if completed.returncode != 0:
            logger.debug(
                f"No git history available (file_path={file_path} "
                f"returncode={completed.returncode} stderr={completed.stderr.strip()})"
            )
            return None

        lines = [line for line in completed.stdout.splitlines() if line.strip()]
        if not lines:
            return None
        return GitInfo(
            created=_parse_log_line(lines[-1], file_path=file_path),
            modified=_parse_log_line(lines[0], file_path=file_path),
        )


def _parse_log_line(line: str, file_path: Path) -> CommitInfo:
    """Parse one ``name<US>email<US>iso-date`` log line.

    Args:
        line: One line of ``git log`` output.
        file_path: File the log belongs to, for error context.

    Returns:
        Parsed commit info.

    Raises:
        HistoryLookupError: If the line is malformed.
    """
    parts = line.strip('"').split(_FIELD_SEPARATOR)
    if len(parts) != 3:
        logger.warning(f"Unexpected git log line (file_path={file_path} line={line!r})")
        raise HistoryLookupError(f"Unexpected git log output for {file_path}: {line!r}")
    name, email, timestamp = parts
    try:
        parsed = datetime.fromisoformat(timestamp.strip())
    except ValueError as exc:
        logger.warning(
            f"Unexpected git timestamp (file_path={file_path} timestamp={timestamp!r})"
        )
        raise HistoryLookupError(str(exc)) from exc
    return CommitInfo(author_name=name, author_email=email, timestamp=parsed)
