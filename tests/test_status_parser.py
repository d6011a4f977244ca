from __future__ import annotations

import pytest  # type: ignore[import]

from git_insight.models import ChangeStatus, FileChange
from git_insight.parsers.status import (
    map_status,
    parse_porcelain_line,
    parse_porcelain_status,
    parse_status,
    parse_status_line,
)


def test_rename_line_yields_old_and_new_path() -> None:
    change = parse_status_line("R oldPath newPath")

    assert change == FileChange(path="newPath", status=ChangeStatus.RENAMED, old_path="oldPath")


def test_rename_with_similarity_score_and_tabs() -> None:
    change = parse_status_line("R100\tdocs/old name.md\tdocs/new name.md")

    assert change is not None
    assert change.status == ChangeStatus.RENAMED
    assert change.old_path == "docs/old name.md"
    assert change.path == "docs/new name.md"


def test_porcelain_rename_arrow() -> None:
    change = parse_status_line("R  src/a.py -> src/b.py")

    assert change is not None
    assert change.old_path == "src/a.py"
    assert change.path == "src/b.py"


@pytest.mark.parametrize(
    "code, expected",
    [
        ("A", ChangeStatus.ADDED),
        ("M", ChangeStatus.MODIFIED),
        ("D", ChangeStatus.DELETED),
        ("R", ChangeStatus.RENAMED),
        ("??", ChangeStatus.ADDED),
        ("T", ChangeStatus.MODIFIED),
        ("MM", ChangeStatus.MODIFIED),
    ],
)
def test_map_status(code: str, expected: ChangeStatus) -> None:
    assert map_status(code) == expected


def test_rename_without_source_degrades_to_modified() -> None:
    change = parse_status_line("R only.py")

    assert change == FileChange(path="only.py", status=ChangeStatus.MODIFIED)


@pytest.mark.parametrize("line", ["", "   ", "M"])
def test_unparseable_lines_are_skipped(line: str) -> None:
    assert parse_status_line(line) is None


def test_parse_status_filters_blank_lines() -> None:
    text = "A\tREADME.md\n\nM\tsrc/app.py\nD\tsrc/old.py\n?? notes.txt\n"

    changes = parse_status(text)

    assert [(change.status, change.path) for change in changes] == [
        (ChangeStatus.ADDED, "README.md"),
        (ChangeStatus.MODIFIED, "src/app.py"),
        (ChangeStatus.DELETED, "src/old.py"),
        (ChangeStatus.ADDED, "notes.txt"),
    ]
    assert all(change.old_path is None for change in changes)


def test_file_change_enforces_rename_invariant() -> None:
    with pytest.raises(ValueError):
        FileChange(path="a.py", status=ChangeStatus.RENAMED)
    with pytest.raises(ValueError):
        FileChange(path="a.py", status=ChangeStatus.MODIFIED, old_path="b.py")


@pytest.mark.parametrize(
    "line, expected",
    [
        (" M docs/my notes.md", FileChange(path="docs/my notes.md", status=ChangeStatus.MODIFIED)),
        ('?? "docs/my notes.md"', FileChange(path="docs/my notes.md", status=ChangeStatus.ADDED)),
        ('A  "caf\\303\\251.md"', FileChange(path="café.md", status=ChangeStatus.ADDED)),
        ("MM src/app.py", FileChange(path="src/app.py", status=ChangeStatus.MODIFIED)),
        (" D old file.txt", FileChange(path="old file.txt", status=ChangeStatus.DELETED)),
    ],
)
def test_porcelain_paths_keep_spaces(line: str, expected: FileChange) -> None:
    assert parse_porcelain_line(line) == expected


def test_porcelain_rename_with_spaces() -> None:
    plain = parse_porcelain_line("R  old name.py -> new name.py")
    quoted = parse_porcelain_line('R  "a b.py" -> "c d.py"')

    assert plain == FileChange(path="new name.py", status=ChangeStatus.RENAMED, old_path="old name.py")
    assert quoted == FileChange(path="c d.py", status=ChangeStatus.RENAMED, old_path="a b.py")


def test_parse_porcelain_status_skips_short_lines() -> None:
    changes = parse_porcelain_status(" M docs/my notes.md\n\nM\n?? new.txt\n")

    assert [(change.status, change.path) for change in changes] == [
        (ChangeStatus.MODIFIED, "docs/my notes.md"),
        (ChangeStatus.ADDED, "new.txt"),
    ]
