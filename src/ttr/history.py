# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Version-control history lookup abstractions."""

import logging
from pathlib import Path
from typing import Protocol

from ttr.model import GitInfo

logger = logging.getLogger(__name__)


class HistoryLookupError(RuntimeError):
    """Represent a history lookup failure other than missing history."""


class HistoryProvider(Protocol):
    """Define history lookup behavior for one test file."""

    def lookup(self, file_path: Path) -> GitInfo | None:
        """Look up creation and modification commits of a file.

        Args:
            file_path: Absolute test file path.

        Returns:
            History metadata, or ``None`` when the file is not under version
            control or has no commits.

        Raises:
            HistoryLookupError: If the lookup fails unexpectedly.
        """
