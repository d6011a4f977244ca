from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from git_insight.models import DiffHunk, FileDiff

logger = logging.getLogger(__name__)

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


class _State(Enum):
    OUTSIDE_HUNK = "outside"
    IN_HUNK = "in_hunk"


@dataclass(slots=True)
class _OpenHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: List[str] = field(default_factory=list)

    def close(self) -> DiffHunk:
        return DiffHunk(
            old_start=self.old_start,
            old_lines=self.old_lines,
            new_start=self.new_start,
            new_lines=self.new_lines,
            content="".join(f"{line}\n" for line in self.lines),
        )


def _open_hunk(line: str) -> Optional[_OpenHunk]:
    match = _HUNK_HEADER.match(line)
    if not match:
        return None
    old_start, old_lines, new_start, new_lines = (int(group or 0) for group in match.groups())
    return _OpenHunk(old_start, old_lines, new_start, new_lines, lines=[line])


def _is_file_marker(line: str) -> bool:
    return line.startswith("+++") or line.startswith("---")


def parse_diff(text: str, path: str = "") -> FileDiff:
    """
    Split unified diff text into hunks and count added and removed lines.

    Lines outside any hunk (file headers, index lines) are ignored. A
    ``diff`` line closes the open hunk so multi-file output does not bleed
    one file's header into the previous hunk.

    Args:
        text: Unified diff text.
        path: File path recorded on the result.

    Returns:
        FileDiff with hunks in order of appearance.
    """
    hunks: List[DiffHunk] = []
    additions = 0
    deletions = 0
    state = _State.OUTSIDE_HUNK
    current: Optional[_OpenHunk] = None

    for line in text.splitlines():
        if line.startswith("@@"):
            if current is not None:
                hunks.append(current.close())
            current = _open_hunk(line)
            if current is None:
                logger.debug("Malformed hunk header: %r", line)
            state = _State.IN_HUNK if current is not None else _State.OUTSIDE_HUNK
            continue

        if line.startswith("diff "):
            if current is not None:
                hunks.append(current.close())
                current = None
            state = _State.OUTSIDE_HUNK
            continue

        if state is _State.OUTSIDE_HUNK or current is None:
            continue

        current.lines.append(line)
        if _is_file_marker(line):
            continue
        if line.startswith("+"):
            additions += 1
        elif line.startswith("-"):
            deletions += 1

    if current is not None:
        hunks.append(current.close())

    return FileDiff(path=path, additions=additions, deletions=deletions, hunks=tuple(hunks))
