from __future__ import annotations

import logging
from typing import Dict, List, Optional

from git_insight.models import ChangeStatus, FileChange

logger = logging.getLogger(__name__)

STATUS_CODES: Dict[str, ChangeStatus] = {
    "A": ChangeStatus.ADDED,
    "M": ChangeStatus.MODIFIED,
    "D": ChangeStatus.DELETED,
    "R": ChangeStatus.RENAMED,
    "??": ChangeStatus.ADDED,
}


def map_status(code: str) -> ChangeStatus:
    """Map a git status code to a ChangeStatus; unknown codes are treated as modified."""
    code = code.strip()
    # Rename and copy codes carry a similarity score, e.g. R100.
    if len(code) > 1 and code[0] in "RC" and code[1:].isdigit():
        code = code[0]
    return STATUS_CODES.get(code, ChangeStatus.MODIFIED)


def parse_status_line(line: str) -> Optional[FileChange]:
    stripped = line.strip()
    if not stripped:
        return None

    if "\t" in stripped:
        code, _, rest = stripped.partition("\t")
        paths = [part for part in rest.split("\t") if part]
        code = code.strip()
    else:
        tokens = stripped.split()
        code, paths = tokens[0], tokens[1:]

    if not code or not paths:
        logger.debug("Skipping unparseable status line: %r", line)
        return None

    status = map_status(code)
    if status == ChangeStatus.RENAMED:
        if len(paths) < 2:
            logger.debug("Rename without a source path, treating as modified: %r", line)
            return FileChange(path=paths[-1], status=ChangeStatus.MODIFIED)
        return FileChange(path=paths[-1], status=status, old_path=paths[0])

    return FileChange(path=paths[-1], status=status)


def parse_status(text: str) -> List[FileChange]:
    """Parse ``--name-status`` output, skipping blank lines."""
    changes: List[FileChange] = []
    for line in text.splitlines():
        change = parse_status_line(line)
        if change is not None:
            changes.append(change)
    return changes


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of paths with spaces or non-ASCII bytes."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        return path[1:-1].encode("utf-8").decode("unicode_escape").encode("latin-1").decode("utf-8", errors="replace")
    return path


def _split_porcelain_paths(rest: str) -> List[str]:
    if rest.startswith('"'):
        # Quoted paths may contain " -> " themselves, so split on the closing quote.
        end = rest.find('" -> ', 1)
        if end != -1:
            return [_unquote(rest[: end + 1]), _unquote(rest[end + 5 :])]
        return [_unquote(rest)]
    old, arrow, new = rest.partition(" -> ")
    return [_unquote(old), _unquote(new)] if arrow else [_unquote(rest)]


def parse_porcelain_line(line: str) -> Optional[FileChange]:
    """
    Parse one ``git status --porcelain`` line.

    The first two columns hold the status code and the path starts at
    column four, so paths containing spaces are kept whole.
    """
    line = line.rstrip("\r\n")
    if len(line) < 4 or line[2] != " ":
        if line.strip():
            logger.debug("Skipping unparseable porcelain line: %r", line)
        return None

    code, rest = line[:2].strip(), line[3:]
    if not code or not rest:
        return None

    paths = _split_porcelain_paths(rest)
    status = map_status(code[0] if code != "??" else code)
    if status == ChangeStatus.RENAMED and len(paths) == 2:
        return FileChange(path=paths[1], status=status, old_path=paths[0])
    if status == ChangeStatus.RENAMED:
        return FileChange(path=paths[-1], status=ChangeStatus.MODIFIED)
    return FileChange(path=paths[-1], status=status)


def parse_porcelain_status(text: str) -> List[FileChange]:
    """Parse ``git status --porcelain`` output."""
    changes: List[FileChange] = []
    for line in text.splitlines():
        change = parse_porcelain_line(line)
        if change is not None:
            changes.append(change)
    return changes
