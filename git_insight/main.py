from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console  # type: ignore[import]
from rich.markup import escape  # type: ignore[import]
from rich.table import Table  # type: ignore[import]

from git_insight.config import Settings
from git_insight.models import StyleType
from git_insight.review import review_feedback, suggest_improvements
from git_insight.services import GitInsightService
from git_insight.vcs import GitRepository, GitRepositoryError

logger = logging.getLogger(__name__)


def _build_service(cfg: Settings) -> GitInsightService:
    repository = GitRepository(cfg.repo_path)
    return GitInsightService(repository, analysis_workers=cfg.analysis_workers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-insight", description="Inspect git history and working-tree changes")
    parser.add_argument("--repo", help="Path to the Git repository (defaults to GIT_INSIGHT_REPO_PATH or cwd)")
    sub = parser.add_subparsers(dest="command", required=True)

    log_cmd = sub.add_parser("log", help="Show recent commits with line statistics")
    log_cmd.add_argument("-n", "--limit", type=int, help="Number of commits")

    sub.add_parser("status", help="Show working-tree changes")

    show_cmd = sub.add_parser("show", help="Show a commit and the files it touched")
    show_cmd.add_argument("commit")

    diff_cmd = sub.add_parser("diff", help="Show hunks of a file diff")
    diff_cmd.add_argument("path")
    diff_cmd.add_argument("--commit", help="Diff of this commit instead of the working tree")

    blame_cmd = sub.add_parser("blame", help="Show line authorship for a file")
    blame_cmd.add_argument("path")

    analyze_cmd = sub.add_parser("analyze", help="Score files for impact, complexity, security and performance")
    analyze_cmd.add_argument("paths", nargs="*", help="Files to analyze (defaults to changed files)")
    analyze_cmd.add_argument("--review", action="store_true", help="Include review feedback and suggestions")

    message_cmd = sub.add_parser("message", help="Generate a commit message for the current changes")
    message_cmd.add_argument("--commit", help="Use the changes of this commit instead of the working tree")
    message_cmd.add_argument("--style", choices=[style.value for style in StyleType])
    message_cmd.add_argument("--no-scope", action="store_true")
    message_cmd.add_argument("--footer", action="store_true")
    message_cmd.add_argument("--max-length", type=int)

    stats_cmd = sub.add_parser("stats", help="Show contributor and file churn statistics")
    stats_cmd.add_argument("--top", type=int, default=10, help="Number of most changed files")

    return parser


def _run_command(args: argparse.Namespace, cfg: Settings, console: Console) -> None:
    service = _build_service(cfg)

    if args.command == "log":
        service.render_commits(service.commit_history(args.limit or cfg.log_limit), console=console)

    elif args.command == "status":
        context = service.status_context()
        console.rule(f"[bold cyan]{escape(context.branch)}[/bold cyan]")
        if context.last_commit is not None:
            console.print(f"Last commit: {context.last_commit.short_hash} {context.last_commit.message}", markup=False)
        service.render_changes(context.changes, console=console)

    elif args.command == "show":
        details = service.commit_details(args.commit)
        service.render_commits([details.commit], console=console)
        service.render_changes(details.changes, console=console)
        console.print(f"Impact: {details.impact} | Components: {', '.join(details.components) or '-'}", markup=False)

    elif args.command == "diff":
        diff = service.file_diff(args.path, args.commit)
        console.rule(f"[bold cyan]{diff.path}[/bold cyan] +{diff.additions} -{diff.deletions}")
        for hunk in diff.hunks:
            console.print(hunk.content, end="", markup=False, highlight=False)

    elif args.command == "blame":
        table = Table("Line", "Commit", "Author", "Date", "Content", show_header=True, header_style="bold magenta")
        for line in service.blame(args.path):
            date = line.date.isoformat() if line.date else ""
            table.add_row(str(line.line), line.hash[:8], escape(line.author), date, escape(line.content))
        console.print(table)

    elif args.command == "analyze":
        paths: List[str] = args.paths or [change.path for change in service.status()]
        analysis = service.analyze(paths)
        service.render_analysis(analysis, console=console)
        if args.review:
            for item in review_feedback(analysis, paths):
                console.print(f"[{item.severity.value}] {item.type}: {item.message}", markup=False)
            for suggestion in suggest_improvements(analysis, paths):
                console.print(f"({suggestion.priority:g}) {suggestion.type}: {suggestion.description}", markup=False)

    elif args.command == "message":
        changes = service.file_changes(args.commit) if args.commit else service.status()
        style = cfg.commit_style()
        overrides = {}
        if args.style:
            overrides["type"] = StyleType(args.style)
        if args.no_scope:
            overrides["include_scope"] = False
        if args.footer:
            overrides["include_footer"] = True
        if args.max_length:
            overrides["max_length"] = args.max_length
        console.print(service.compose_message(changes, dataclasses.replace(style, **overrides)), markup=False)

    elif args.command == "stats":
        stats = service.repository_stats(limit=args.top)
        console.rule(f"[bold cyan]{stats.total_commits} commits[/bold cyan]")
        contributors = Table("Author", "Commits", "+", "-", show_header=True, header_style="bold magenta")
        for contributor in stats.contributors:
            contributors.add_row(
                escape(contributor.name), str(contributor.commits), str(contributor.additions), str(contributor.deletions)
            )
        console.print(contributors)
        files = Table("Path", "Changes", show_header=True, header_style="bold magenta")
        for churn in stats.most_changed_files:
            files.add_row(escape(churn.path), str(churn.changes))
        console.print(files)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Settings()
    if args.repo:
        cfg = cfg.model_copy(update={"repo_path": Path(args.repo)})

    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    console = Console(width=cfg.console_width)

    try:
        _run_command(args, cfg, console)
    except (GitRepositoryError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]{exc}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
