from __future__ import annotations

from git_insight.vcs.git_repository import GitRepository, GitRepositoryError

__all__ = ["GitRepository", "GitRepositoryError"]
