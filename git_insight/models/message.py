from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StyleType(str, Enum):
    CONVENTIONAL = "conventional"
    GITMOJI = "gitmoji"
    DETAILED = "detailed"
    SIMPLE = "simple"


@dataclass(frozen=True, slots=True)
class CommitStyle:
    """Rendering options for generated commit messages."""

    type: StyleType = StyleType.CONVENTIONAL
    include_scope: bool = True
    include_footer: bool = False
    max_length: int = 72

    def __post_init__(self) -> None:
        # Truncation reserves three characters for the ellipsis.
        if self.max_length < 4:
            raise ValueError(f"max_length must be at least 4, got {self.max_length}")
