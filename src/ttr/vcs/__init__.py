# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Version-control history providers."""

from ttr.vcs.git import GitHistory

__all__ = ["GitHistory"]
