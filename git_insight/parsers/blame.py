from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from git_insight.models import BlameLine

logger = logging.getLogger(__name__)

# Porcelain block header: "<sha> <orig-line> <final-line> [<group-size>]".
_COMMIT_HEADER = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) \d+ \d+(?: \d+)?$")
_TZ_OFFSET = re.compile(r"^([+-])(\d{2})(\d{2})$")

_REQUIRED = ("hash", "author", "author-time")


def _to_datetime(epoch: str, tz: Optional[str]) -> Optional[datetime]:
    try:
        moment = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.debug("Unparseable author-time: %r", epoch)
        return None

    match = _TZ_OFFSET.match(tz or "")
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        moment = moment.astimezone(timezone(-offset if sign == "-" else offset))
    return moment


def parse_blame(text: str) -> List[BlameLine]:
    """
    Parse ``git blame --line-porcelain`` output.

    Each tab-prefixed content line closes a block. Blocks missing the
    commit hash, author or author-time are dropped, and line numbers follow
    emission order.
    """
    results: List[BlameLine] = []
    current: Dict[str, str] = {}

    for line in text.split("\n"):
        if line.startswith("\t"):
            if all(key in current for key in _REQUIRED):
                results.append(
                    BlameLine(
                        hash=current["hash"],
                        author=current["author"],
                        date=_to_datetime(current["author-time"], current.get("author-tz")),
                        line=len(results) + 1,
                        content=line[1:],
                    )
                )
            else:
                logger.debug("Dropping blame block without complete metadata: %s", sorted(current))
            current = {}
        elif line.startswith("author "):
            current["author"] = line[len("author "):]
        elif line.startswith("author-time "):
            current["author-time"] = line[len("author-time "):].strip()
        elif line.startswith("author-tz "):
            current["author-tz"] = line[len("author-tz "):].strip()
        elif line.startswith("hash "):
            current["hash"] = line[len("hash "):].strip()
        else:
            match = _COMMIT_HEADER.match(line)
            if match:
                current["hash"] = match.group(1)

    return results
