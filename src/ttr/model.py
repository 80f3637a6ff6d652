# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for transcoded test cases."""

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_TEST_SUFFIX = ".test.txt"
DEFAULT_DESCRIPTION_FILE = "_section_description.txt"


@dataclass(frozen=True)
class CommitInfo:
    """Represent one commit touching a test file.

    Attributes:
        author_name: Commit author name.
        author_email: Commit author email.
        timestamp: Author timestamp of the commit.
    """

    author_name: str
    author_email: str
    timestamp: datetime

    @property
    def author(self) -> str:
        """Return the author as ``Name <email>``."""
        if not self.author_email:
            return self.author_name
        return f"{self.author_name} <{self.author_email}>"


@dataclass(frozen=True)
class GitInfo:
    """Represent version-control history of one test file.

    Attributes:
        created: Commit that first added the file.
        modified: Most recent commit touching the file.
    """

    created: CommitInfo
    modified: CommitInfo


@dataclass(frozen=True)
class SectionInfo:
    """Represent the section placement derived from a test file path."""

    section: str
    hierarchy: str
    depth: int


@dataclass(frozen=True)
class TestRow:
    """Represent one test case as a typed table row.

    Attributes:
        title: Test title, encoded in the file name on disk.
        steps: Step text, possibly empty.
        expected_result: Expected result text; ``None`` when absent.
        section: Immediate parent section label.
        section_hierarchy: Full section chain joined with ``" > "``.
        section_depth: Number of section levels.
        section_description: Description of the test's section, when known.
        fields: Recognized field name to value mapping.
        git_info: History metadata; ``None`` when unavailable.
        extra: Unrecognized table columns carried on the row.
        source_path: Root-relative POSIX path of the source file on export.
    """

    __test__ = False

    title: str
    steps: str = ""
    expected_result: str | None = None
    section: str = ""
    section_hierarchy: str = ""
    section_depth: int = 0
    section_description: str | None = None
    fields: dict[str, str] = field(default_factory=dict)
    git_info: GitInfo | None = None
    extra: dict[str, str] = field(default_factory=dict)
    source_path: str | None = None


@dataclass(frozen=True)
class TranscodeOptions:
    """Configure one export or import run.

    Attributes:
        suffix: File name suffix identifying test files.
        description_file: Per-directory section description file name.
        git_footer: Append last-modification footer to exported steps.
        use_git: Look up version-control history on export.
        max_workers: Thread pool size for concurrent file I/O.
        exclude_patterns: Gitwildmatch patterns excluded from export.
    """

    suffix: str = DEFAULT_TEST_SUFFIX
    description_file: str = DEFAULT_DESCRIPTION_FILE
    git_footer: bool = False
    use_git: bool = True
    max_workers: int = 8
    exclude_patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        if not self.suffix:
            raise ValueError("suffix must not be empty")
