from __future__ import annotations

from git_insight.parsers.blame import parse_blame
from git_insight.parsers.diff import parse_diff
from git_insight.parsers.log import COMMIT_MARKER, LOG_FORMAT, parse_log, parse_log_entry
from git_insight.parsers.stats import build_repository_stats, parse_numstat, parse_shortlog
from git_insight.parsers.status import (
    parse_porcelain_line,
    parse_porcelain_status,
    parse_status,
    parse_status_line,
)

__all__ = [
    "COMMIT_MARKER",
    "LOG_FORMAT",
    "build_repository_stats",
    "parse_blame",
    "parse_diff",
    "parse_log",
    "parse_log_entry",
    "parse_numstat",
    "parse_shortlog",
    "parse_porcelain_line",
    "parse_porcelain_status",
    "parse_status",
    "parse_status_line",
]
