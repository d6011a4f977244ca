from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ChangeStatus(str, Enum):
    """Status of a file within a change set."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True, slots=True)
class CommitStats:
    """Aggregate line statistics from a ``--stat`` summary line."""

    additions: int = 0
    deletions: int = 0
    files: int = 0


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit parsed from log output.

    ``date`` is ``None`` when the date text could not be parsed; the
    original text is always kept in ``raw_date``.
    """

    hash: str
    author: str
    date: Optional[datetime]
    message: str
    stats: CommitStats = field(default_factory=CommitStats)
    raw_date: str = ""

    @property
    def has_valid_date(self) -> bool:
        return self.date is not None

    @property
    def short_hash(self) -> str:
        return self.hash[:8]


@dataclass(frozen=True, slots=True)
class FileChange:
    """Represents a single file delta in a commit or working tree."""

    path: str
    status: ChangeStatus
    additions: int = 0
    deletions: int = 0
    old_path: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.old_path is not None) != (self.status == ChangeStatus.RENAMED):
            raise ValueError("old_path must be set for renamed files and only for renamed files")


@dataclass(frozen=True, slots=True)
class DiffHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    content: str


@dataclass(frozen=True, slots=True)
class FileDiff:
    """Hunks and line counts for a single file diff."""

    path: str
    additions: int = 0
    deletions: int = 0
    hunks: Tuple[DiffHunk, ...] = ()


@dataclass(frozen=True, slots=True)
class BlameLine:
    hash: str
    author: str
    date: Optional[datetime]
    line: int
    content: str


@dataclass(frozen=True, slots=True)
class ContributorStats:
    name: str
    commits: int
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True, slots=True)
class FileChurn:
    path: str
    changes: int


@dataclass(frozen=True, slots=True)
class RepositoryStats:
    """Repository-wide commit and contributor totals."""

    total_commits: int
    contributors: Tuple[ContributorStats, ...] = ()
    most_changed_files: Tuple[FileChurn, ...] = ()
