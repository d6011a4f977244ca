from __future__ import annotations

from git_insight.models.analysis import (
    Analysis,
    Feedback,
    PerformanceImpact,
    Recommendation,
    SecurityIssue,
    Severity,
    Suggestion,
)
from git_insight.models.git import (
    BlameLine,
    ChangeStatus,
    Commit,
    CommitStats,
    ContributorStats,
    DiffHunk,
    FileChange,
    FileChurn,
    FileDiff,
    RepositoryStats,
)
from git_insight.models.message import CommitStyle, StyleType

__all__ = [
    "Analysis",
    "BlameLine",
    "ChangeStatus",
    "Commit",
    "CommitStats",
    "CommitStyle",
    "ContributorStats",
    "DiffHunk",
    "Feedback",
    "FileChange",
    "FileChurn",
    "FileDiff",
    "PerformanceImpact",
    "Recommendation",
    "RepositoryStats",
    "SecurityIssue",
    "Severity",
    "StyleType",
    "Suggestion",
]
