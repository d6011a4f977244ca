from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console  # type: ignore[import]
from rich.markup import escape  # type: ignore[import]
from rich.table import Table  # type: ignore[import]

from git_insight.analysis import ImpactAnalyzer
from git_insight.messages import MessageComposer
from git_insight.models import (
    Analysis,
    BlameLine,
    Commit,
    CommitStyle,
    FileChange,
    FileDiff,
    Recommendation,
    RepositoryStats,
)
from git_insight.parsers import (
    build_repository_stats,
    parse_blame,
    parse_diff,
    parse_log,
    parse_numstat,
    parse_shortlog,
    parse_porcelain_status,
    parse_status,
)
from git_insight.review import affected_components, change_impact, recommendations
from git_insight.vcs import GitRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommitDetails:
    """A commit together with the files it touched and how far the change reaches."""

    commit: Commit
    changes: Tuple[FileChange, ...] = ()
    impact: str = "low"
    components: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusContext:
    branch: str
    changes: Tuple[FileChange, ...]
    last_commit: Optional[Commit] = None


@dataclass(frozen=True, slots=True)
class RepositoryAnalysis:
    branch: str
    changes: Tuple[FileChange, ...]
    analysis: Analysis
    stats: RepositoryStats
    recommendations: Tuple[Recommendation, ...] = ()


class GitInsightService:
    """Coordinates git output capture with the parsers, analyzer and composer."""

    def __init__(
        self,
        repository: GitRepository,
        analyzer: Optional[ImpactAnalyzer] = None,
        composer: Optional[MessageComposer] = None,
        analysis_workers: Optional[int] = None,
    ) -> None:
        self._repository = repository
        self._analyzer = analyzer or ImpactAnalyzer()
        self._composer = composer or MessageComposer()
        self._analysis_workers = analysis_workers

    def commit_history(self, limit: int = 10) -> List[Commit]:
        return parse_log(self._repository.log_text(limit))

    def file_changes(self, commit: str) -> List[FileChange]:
        """File changes of a commit with line counts merged in from ``--numstat``."""
        changes = parse_status(self._repository.name_status_text(commit))
        counts = {entry.path: entry for entry in parse_numstat(self._repository.commit_numstat_text(commit))}
        merged = []
        for change in changes:
            entry = counts.get(change.path)
            if entry is not None:
                change = dataclasses.replace(change, additions=entry.additions, deletions=entry.deletions)
            merged.append(change)
        return merged

    def commit_details(self, commit: str) -> CommitDetails:
        commits = parse_log(self._repository.commit_text(commit))
        if not commits:
            raise ValueError(f"No commit found for {commit}")

        changes = self.file_changes(commit)
        paths = [change.path for change in changes]
        details = CommitDetails(
            commit=commits[0],
            changes=tuple(changes),
            impact=change_impact(paths),
            components=tuple(affected_components(paths)),
        )
        if details.commit.stats.files and details.commit.stats.files != len(details.changes):
            logger.warning(
                "Commit %s reports %d changed files but %d file changes were parsed",
                details.commit.short_hash,
                details.commit.stats.files,
                len(details.changes),
            )
        return details

    def status(self) -> List[FileChange]:
        return parse_porcelain_status(self._repository.status_text())

    def status_context(self) -> StatusContext:
        """Current branch, working-tree changes and the most recent commit."""
        history = self.commit_history(1)
        return StatusContext(
            branch=self._repository.current_branch(),
            changes=tuple(self.status()),
            last_commit=history[0] if history else None,
        )

    def file_diff(self, path: str, commit: Optional[str] = None) -> FileDiff:
        return parse_diff(self._repository.diff_text(path, commit), path=path)

    def blame(self, path: str) -> List[BlameLine]:
        return parse_blame(self._repository.blame_text(path))

    def analyze(self, paths: Iterable[str]) -> Analysis:
        contents: Dict[str, Optional[str]] = {path: self._repository.read_file(path) for path in paths}
        return self._analyzer.analyze(contents, workers=self._analysis_workers)

    def compose_message(self, changes: Sequence[FileChange], style: CommitStyle) -> str:
        return self._composer.compose(changes, style)

    def repository_stats(self, limit: int = 10) -> RepositoryStats:
        shortlog = self._repository.shortlog_text()
        author_numstat = {
            name: self._repository.author_numstat_text(name) for name, _ in parse_shortlog(shortlog)
        }
        return build_repository_stats(
            commit_count_text=self._repository.commit_count_text(),
            shortlog_text=shortlog,
            author_numstat=author_numstat,
            numstat_text=self._repository.numstat_text(),
            limit=limit,
        )

    def repository_analysis(self) -> RepositoryAnalysis:
        changes = self.status()
        analysis = self.analyze(change.path for change in changes)
        return RepositoryAnalysis(
            branch=self._repository.current_branch(),
            changes=tuple(changes),
            analysis=analysis,
            stats=self.repository_stats(),
            recommendations=tuple(recommendations(analysis, changes)),
        )

    @staticmethod
    def render_commits(commits: Iterable[Commit], *, console: Optional[Console] = None) -> None:
        console = console or Console()
        table = Table(
            "Commit", "Author", "Date", "Message", "Files", "+", "-", show_header=True, header_style="bold magenta"
        )
        for commit in commits:
            date = commit.date.isoformat() if commit.date else f"[red]{escape(commit.raw_date) or 'invalid'}[/red]"
            table.add_row(
                commit.short_hash,
                escape(commit.author),
                date,
                escape(commit.message),
                str(commit.stats.files),
                str(commit.stats.additions),
                str(commit.stats.deletions),
            )
        console.print(table)

    @staticmethod
    def render_changes(changes: Iterable[FileChange], *, console: Optional[Console] = None) -> None:
        console = console or Console()
        table = Table("Status", "Path", "+", "-", show_header=True, header_style="bold magenta")
        for change in changes:
            path = f"{change.old_path} -> {change.path}" if change.old_path else change.path
            table.add_row(change.status.value, escape(path), str(change.additions), str(change.deletions))
        console.print(table)

    @staticmethod
    def render_analysis(analysis: Analysis, *, console: Optional[Console] = None) -> None:
        console = console or Console()
        console.rule(f"[bold cyan]Analysis[/bold cyan] (risk: {analysis.risk_level})")
        console.print(
            f"Impact: {analysis.impact_score}  Complexity: {analysis.complexity_score}  "
            f"Performance: {analysis.performance_impact.score}"
        )

        if analysis.security_issues:
            table = Table("Severity", "Location", "Description", show_header=True, header_style="bold magenta")
            for issue in analysis.security_issues:
                table.add_row(issue.severity.value, escape(issue.location), issue.description)
            console.print(table)
        else:
            console.print("[green]No security issues found.[/green]")

        for detail in analysis.performance_impact.details:
            console.print(f"- {detail}")
