from __future__ import annotations

from git_insight.services.insight_service import (
    CommitDetails,
    GitInsightService,
    RepositoryAnalysis,
    StatusContext,
)

__all__ = ["CommitDetails", "GitInsightService", "RepositoryAnalysis", "StatusContext"]
