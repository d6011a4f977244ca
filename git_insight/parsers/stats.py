from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from git_insight.models import ContributorStats, FileChurn, RepositoryStats

logger = logging.getLogger(__name__)

_NUMSTAT_LINE = re.compile(r"^(\d+|-)\t(\d+|-)\t(.+)$")
_SHORTLOG_LINE = re.compile(r"^\s*(\d+)\s+(.+?)\s*$")
# Renames in numstat output: "src/{old.py => new.py}" or "old.py => new.py".
_BRACED_RENAME = re.compile(r"^(.*)\{(.*) => (.*)\}(.*)$")


@dataclass(frozen=True, slots=True)
class NumstatEntry:
    additions: int
    deletions: int
    path: str
    old_path: Optional[str] = None


def _count(value: str) -> int:
    # Binary files are reported as "-".
    return 0 if value == "-" else int(value)


def _join(prefix: str, middle: str, suffix: str) -> str:
    # An empty side such as "{ => sub}" leaves a doubled or leading separator behind.
    return (prefix + middle + suffix).replace("//", "/").lstrip("/")


def split_rename(path: str) -> tuple[Optional[str], str]:
    """Split a numstat rename path into (old path, new path); old path is None for plain paths."""
    match = _BRACED_RENAME.match(path)
    if match:
        prefix, old, new, suffix = match.groups()
        return _join(prefix, old, suffix), _join(prefix, new, suffix)
    if " => " in path:
        old, _, new = path.partition(" => ")
        return old, new
    return None, path


def parse_numstat(text: str) -> List[NumstatEntry]:
    """Parse ``--numstat`` lines; anything else in the output is skipped."""
    entries: List[NumstatEntry] = []
    for line in text.splitlines():
        match = _NUMSTAT_LINE.match(line.strip("\r"))
        if not match:
            continue
        additions, deletions, path = match.groups()
        old_path, path = split_rename(path)
        entries.append(NumstatEntry(_count(additions), _count(deletions), path, old_path))
    return entries


def parse_shortlog(text: str) -> List[tuple[str, int]]:
    """Parse ``git shortlog -sn`` into (name, commit count) pairs, keeping order."""
    authors: List[tuple[str, int]] = []
    for line in text.splitlines():
        match = _SHORTLOG_LINE.match(line)
        if match:
            authors.append((match.group(2), int(match.group(1))))
    return authors


def parse_commit_count(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        logger.debug("Unparseable commit count: %r", text)
        return 0


def sum_numstat(entries: Iterable[NumstatEntry]) -> tuple[int, int]:
    additions = deletions = 0
    for entry in entries:
        additions += entry.additions
        deletions += entry.deletions
    return additions, deletions


def most_changed_files(entries: Iterable[NumstatEntry], limit: int = 10) -> List[FileChurn]:
    churn: Counter[str] = Counter()
    for entry in entries:
        churn[entry.path] += entry.additions + entry.deletions
    ranked = sorted(churn.items(), key=lambda item: (-item[1], item[0]))
    return [FileChurn(path=path, changes=changes) for path, changes in ranked[:limit]]


def build_repository_stats(
    commit_count_text: str,
    shortlog_text: str,
    author_numstat: Optional[Dict[str, str]] = None,
    numstat_text: str = "",
    limit: int = 10,
) -> RepositoryStats:
    """
    Combine captured command output into RepositoryStats.

    Args:
        commit_count_text: ``rev-list --count`` output.
        shortlog_text: ``shortlog -sn`` output.
        author_numstat: Per-author ``log --numstat`` output keyed by author name.
        numstat_text: Repository-wide ``log --numstat`` output.
        limit: Number of most changed files to keep.
    """
    author_numstat = author_numstat or {}
    contributors = []
    for name, commits in parse_shortlog(shortlog_text):
        additions, deletions = sum_numstat(parse_numstat(author_numstat.get(name, "")))
        contributors.append(
            ContributorStats(name=name, commits=commits, additions=additions, deletions=deletions)
        )

    return RepositoryStats(
        total_commits=parse_commit_count(commit_count_text),
        contributors=tuple(contributors),
        most_changed_files=tuple(most_changed_files(parse_numstat(numstat_text), limit=limit)),
    )
