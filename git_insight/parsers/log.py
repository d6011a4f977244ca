from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional

from git_insight.models import Commit, CommitStats

logger = logging.getLogger(__name__)

# Record separator emitted by ``--pretty=format:%x1e%H|%an|%ad|%s``.
COMMIT_MARKER = "\x1e"
LOG_FORMAT = "%x1e%H|%an|%ad|%s"

_SUMMARY_PATTERN = re.compile(
    r"(\d+) files? changed(?:, (\d+) insertions?\(\+\))?(?:, (\d+) deletions?\(-\))?"
)

# git's default ``%ad`` format, e.g. "Mon Oct 14 12:34:56 2024 +0200".
_GIT_DATE_FORMATS = (
    "%a %b %d %H:%M:%S %Y %z",
    "%a %b %d %H:%M:%S %Y",
)


def parse_log(text: str, marker: str = COMMIT_MARKER) -> List[Commit]:
    """
    Parse raw ``git log`` output into commits, preserving input order.

    Args:
        text: Captured log output.
        marker: Commit-boundary marker separating the records.

    Returns:
        One Commit per non-empty record.
    """
    blocks = text.split(marker) if marker else [text]
    return [parse_log_entry(block) for block in blocks if block.strip()]


def parse_log_entry(entry: str) -> Commit:
    lines = entry.strip("\n").split("\n")
    header = lines[0] if lines else ""

    fields = header.split("|", 3)
    fields += [""] * (4 - len(fields))
    commit_hash, author, date_text, message = (value.strip() for value in fields)

    return Commit(
        hash=commit_hash,
        author=author,
        date=parse_date(date_text),
        message=message,
        stats=parse_stats(lines[1:]),
        raw_date=date_text,
    )


def parse_stats(lines: List[str]) -> CommitStats:
    """Read counters from the trailing ``N files changed`` summary line, if any."""
    for line in reversed(lines):
        match = _SUMMARY_PATTERN.search(line)
        if match:
            files, additions, deletions = (int(group or 0) for group in match.groups())
            return CommitStats(additions=additions, deletions=deletions, files=files)
    return CommitStats()


def parse_date(text: str) -> Optional[datetime]:
    """
    Parse a commit date in git default, ISO 8601, RFC 2822 or unix form.

    Returns ``None`` for text that matches none of them.
    """
    text = text.strip()
    if not text:
        return None

    if text.isdigit():
        try:
            return datetime.fromtimestamp(int(text), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Timestamp out of range: %r", text)
            return None

    for fmt in _GIT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass

    logger.debug("Unparseable commit date: %r", text)
    return None
