from __future__ import annotations

import logging
from io import StringIO

import pytest  # type: ignore[import]
from rich.console import Console  # type: ignore[import]

from git_insight.models import ChangeStatus, CommitStyle, FileChange, Severity
from git_insight.services import GitInsightService

from tests.conftest import DummyRepository


@pytest.fixture()
def service(dummy_repository: DummyRepository) -> GitInsightService:
    return GitInsightService(dummy_repository)  # type: ignore[arg-type]


def test_commit_history(service: GitInsightService, dummy_repository: DummyRepository) -> None:
    commits = service.commit_history(limit=5)

    assert len(commits) == 2
    assert commits[0].message == "Add parser"
    assert ("log_text", (5,)) in dummy_repository.calls


def test_file_changes_merge_line_counts(service: GitInsightService) -> None:
    changes = service.file_changes("abc123")

    assert changes == [
        FileChange(path="src/app.py", status=ChangeStatus.MODIFIED, additions=8, deletions=4),
        FileChange(path="src/utils.py", status=ChangeStatus.ADDED, additions=3, deletions=0),
    ]


def test_commit_details_match_file_count(service: GitInsightService, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        details = service.commit_details("abc123")

    assert details.commit.stats.files == len(details.changes) == 2
    assert "reports" not in caplog.text


def test_commit_details_warns_on_mismatch(
    dummy_repository: DummyRepository, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(dummy_repository, "name_status_text", lambda commit: "M\tsrc/app.py\n")
    service = GitInsightService(dummy_repository)  # type: ignore[arg-type]

    with caplog.at_level(logging.WARNING):
        details = service.commit_details("abc123")

    assert len(details.changes) == 1
    assert "reports 2 changed files but 1 file changes were parsed" in caplog.text


def test_status_and_diff_and_blame(service: GitInsightService) -> None:
    assert [change.status for change in service.status()] == [ChangeStatus.MODIFIED, ChangeStatus.ADDED]

    diff = service.file_diff("src/app.py")
    assert diff.path == "src/app.py"
    assert (diff.additions, diff.deletions, len(diff.hunks)) == (1, 1, 1)

    blame = service.blame("src/app.py")
    assert [(line.line, line.author) for line in blame] == [(1, "Jane Doe")]


def test_analyze_reads_through_repository(service: GitInsightService, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        analysis = service.analyze(["src/app.py", "src/new_module.js", "missing.py"])

    assert [issue.severity for issue in analysis.security_issues] == [Severity.MEDIUM]
    assert analysis.performance_impact.score == 1
    assert analysis.complexity_score > 0
    assert "Could not read missing.py" in caplog.text


def test_compose_message(service: GitInsightService) -> None:
    message = service.compose_message(service.status(), CommitStyle())

    assert message == "feat(src): Update app and related files"


def test_repository_stats(service: GitInsightService) -> None:
    stats = service.repository_stats(limit=1)

    assert stats.total_commits == 42
    assert [(item.name, item.commits, item.additions) for item in stats.contributors] == [
        ("Jane Doe", 30, 10),
        ("John Smith", 12, 1),
    ]
    assert [(item.path, item.changes) for item in stats.most_changed_files] == [("src/app.py", 22)]


def test_repository_analysis(service: GitInsightService) -> None:
    result = service.repository_analysis()

    assert result.branch == "main"
    assert len(result.changes) == 2
    assert [item.type for item in result.recommendations] == ["review"]


def test_render_outputs(service: GitInsightService) -> None:
    buffer = StringIO()
    console = Console(file=buffer, width=200)

    service.render_commits(service.commit_history(), console=console)
    service.render_changes(service.file_changes("abc123"), console=console)
    service.render_analysis(service.analyze(["src/new_module.js"]), console=console)

    output = buffer.getvalue()
    assert "abc123de" in output
    assert "not-a-date" in output
    assert "src/utils.py" in output
    assert "Use of innerHTML" in output


def test_file_changes_match_renamed_numstat_paths(
    dummy_repository: DummyRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(dummy_repository, "name_status_text", lambda commit: "R100\tsrc/old.py\tsrc/new.py\n")
    monkeypatch.setattr(dummy_repository, "commit_numstat_text", lambda commit: "3\t1\tsrc/{old.py => new.py}\n")
    service = GitInsightService(dummy_repository)  # type: ignore[arg-type]

    changes = service.file_changes("abc123")

    assert changes == [
        FileChange(path="src/new.py", status=ChangeStatus.RENAMED, additions=3, deletions=1, old_path="src/old.py")
    ]


def test_status_keeps_paths_with_spaces(dummy_repository: DummyRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dummy_repository, "status_text", lambda: ' M docs/my notes.md\n?? "new dir/a b.txt"\n')
    service = GitInsightService(dummy_repository)  # type: ignore[arg-type]

    assert [change.path for change in service.status()] == ["docs/my notes.md", "new dir/a b.txt"]


def test_status_context(service: GitInsightService) -> None:
    context = service.status_context()

    assert context.branch == "main"
    assert [change.path for change in context.changes] == ["src/app.py", "src/new_module.js"]
    assert context.last_commit is not None
    assert context.last_commit.message == "Add parser"


def test_status_context_without_commits(dummy_repository: DummyRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dummy_repository, "log_text", lambda limit=10: "")
    service = GitInsightService(dummy_repository)  # type: ignore[arg-type]

    assert service.status_context().last_commit is None


def test_repository_analysis_includes_stats(service: GitInsightService) -> None:
    result = service.repository_analysis()

    assert result.stats.total_commits == 42
    assert [item.name for item in result.stats.contributors] == ["Jane Doe", "John Smith"]


def test_commit_details_report_impact_and_components(service: GitInsightService) -> None:
    details = service.commit_details("abc123")

    assert details.impact == "low"
    assert details.components == ("src",)


def test_commit_details_impact_grows_with_file_count(
    dummy_repository: DummyRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    paths = [f"pkg{index}/mod.py" for index in range(12)]
    monkeypatch.setattr(dummy_repository, "name_status_text", lambda commit: "".join(f"M\t{p}\n" for p in paths))
    monkeypatch.setattr(dummy_repository, "commit_numstat_text", lambda commit: "")
    service = GitInsightService(dummy_repository)  # type: ignore[arg-type]

    details = service.commit_details("abc123")

    assert details.impact == "high"
    assert details.components[:2] == ("pkg0", "pkg1")
    assert len(details.components) == 12
