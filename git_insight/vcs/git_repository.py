from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from git import Repo  # type: ignore[import]
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError  # type: ignore[import]

from git_insight.parsers.log import LOG_FORMAT

logger = logging.getLogger(__name__)


class GitRepositoryError(RuntimeError):
    """Raised when the repository cannot be accessed or a git command fails."""


class GitRepository:
    """Thin wrapper around GitPython returning the captured text of git commands."""

    def __init__(self, repo_path: str | Path) -> None:
        self.repo_path = Path(repo_path)
        if not self.repo_path.exists():
            raise GitRepositoryError(f"Repository path does not exist: {self.repo_path}")

        try:
            self._repo = Repo(self.repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise GitRepositoryError(f"Failed to open repository: {exc}") from exc

        if self._repo.bare:
            raise GitRepositoryError("Bare repositories are not supported")

    def log_text(self, limit: int = 10) -> str:
        return self._run("log", f"-n{limit}", f"--pretty=format:{LOG_FORMAT}", "--stat")

    def commit_text(self, commit: str) -> str:
        return self._run("show", f"--pretty=format:{LOG_FORMAT}", "--stat", commit)

    def name_status_text(self, commit: str) -> str:
        return self._run("show", "--name-status", "--pretty=format:", commit)

    def commit_numstat_text(self, commit: str) -> str:
        return self._run("show", "--numstat", "--pretty=format:", commit)

    def status_text(self) -> str:
        return self._run("status", "--porcelain")

    def diff_text(self, path: str, commit: Optional[str] = None) -> str:
        if commit:
            return self._run("show", commit, "--", path)
        return self._run("diff", "HEAD", "--", path)

    def blame_text(self, path: str) -> str:
        return self._run("blame", "--line-porcelain", path)

    def commit_count_text(self) -> str:
        return self._run("rev_list", "--count", "HEAD")

    def shortlog_text(self) -> str:
        return self._run("shortlog", "-sn", "--all", "--no-merges", "HEAD")

    def author_numstat_text(self, author: str) -> str:
        return self._run("log", f"--author={author}", "--no-merges", "--pretty=tformat:", "--numstat")

    def numstat_text(self) -> str:
        return self._run("log", "--all", "--numstat", "--format=")

    def current_branch(self) -> str:
        return self._run("rev_parse", "--abbrev-ref", "HEAD").strip()

    def read_file(self, path: str) -> Optional[str]:
        """Read a working-tree file, returning ``None`` when it cannot be read."""
        try:
            return (self.repo_path / path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Could not read %s: %s", path, exc)
            return None

    def _run(self, command: str, *args: str) -> str:
        logger.debug("git %s %s", command.replace("_", "-"), " ".join(args))
        try:
            return getattr(self._repo.git, command)(*args)
        except GitCommandError as exc:
            logger.warning("git %s failed: %s", command.replace("_", "-"), exc.stderr.strip() if exc.stderr else exc)
            raise GitRepositoryError(f"git {command.replace('_', '-')} failed: {exc}") from exc
