from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from git_insight.models import ChangeStatus, CommitStyle, FileChange, StyleType

ROOT_SCOPE = "root"
MULTIPLE_SCOPE = "multiple"
ELLIPSIS = "..."
MORE_CHANGES = "\n- ... and more changes"

# Footers are only added when more than this many characters remain. Lengths
# are counted in code points, so an emoji counts once.
FOOTER_BUDGET = 20

TypeRule = Tuple[Callable[[Sequence[FileChange], re.Pattern[str]], bool], str]


def _has_added(changes: Sequence[FileChange], fix_pattern: re.Pattern[str]) -> bool:
    return any(change.status == ChangeStatus.ADDED for change in changes)


def _has_fix(changes: Sequence[FileChange], fix_pattern: re.Pattern[str]) -> bool:
    return any(
        change.status == ChangeStatus.MODIFIED and fix_pattern.search(change.path) for change in changes
    )


def _has_modified(changes: Sequence[FileChange], fix_pattern: re.Pattern[str]) -> bool:
    return any(change.status == ChangeStatus.MODIFIED for change in changes)


def _always(changes: Sequence[FileChange], fix_pattern: re.Pattern[str]) -> bool:
    return True


DEFAULT_TYPE_RULES: Tuple[TypeRule, ...] = (
    (_has_added, "feat"),
    (_has_fix, "fix"),
    (_has_modified, "refactor"),
    (_always, "chore"),
)

DEFAULT_ACTION_WORDS: Dict[ChangeStatus, str] = {
    ChangeStatus.ADDED: "Add",
    ChangeStatus.MODIFIED: "Update",
    ChangeStatus.DELETED: "Remove",
    ChangeStatus.RENAMED: "Rename",
}

DEFAULT_EMOJI: Dict[str, str] = {
    "feat": "\u2728",
    "fix": "\U0001f41b",
    "refactor": "\u267b\ufe0f",
    "chore": "\U0001f527",
}
DEFAULT_EMOJI_FALLBACK = "\U0001f4dd"


@dataclass(frozen=True, slots=True)
class ComposerConfig:
    """Classification tables used by MessageComposer."""

    fix_pattern: str = r"test|spec|fix"
    type_rules: Tuple[TypeRule, ...] = DEFAULT_TYPE_RULES
    action_words: Mapping[ChangeStatus, str] = field(default_factory=lambda: MappingProxyType(DEFAULT_ACTION_WORDS))
    emoji: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(DEFAULT_EMOJI))
    emoji_fallback: str = DEFAULT_EMOJI_FALLBACK


class MessageComposer:
    """Builds a commit message from a list of file changes."""

    def __init__(self, config: ComposerConfig | None = None) -> None:
        self._config = config or ComposerConfig()
        self._fix_pattern = re.compile(self._config.fix_pattern, re.IGNORECASE)

    def compose(self, changes: Sequence[FileChange], style: CommitStyle) -> str:
        if not changes:
            raise ValueError("At least one file change is required to compose a commit message")

        scope = self.scope(changes)
        change_type = self.change_type(changes)
        description = self.description(changes)

        renderers = {
            StyleType.CONVENTIONAL: self._conventional,
            StyleType.GITMOJI: self._gitmoji,
            StyleType.DETAILED: self._detailed,
        }
        renderer = renderers.get(StyleType(style.type))
        if renderer is None:
            message = description
        else:
            message = renderer(change_type, scope, description, changes, style)

        return truncate(message, style.max_length)

    def scope(self, changes: Sequence[FileChange]) -> str:
        segments = {_top_level_segment(change.path) for change in changes}
        return segments.pop() if len(segments) == 1 else MULTIPLE_SCOPE

    def change_type(self, changes: Sequence[FileChange]) -> str:
        for predicate, result in self._config.type_rules:
            if predicate(changes, self._fix_pattern):
                return result
        return "chore"

    def description(self, changes: Sequence[FileChange]) -> str:
        main = changes[0]
        action = self._config.action_words.get(ChangeStatus(main.status), "Update")
        suffix = " and related files" if len(changes) > 1 else ""
        return f"{action} {_component(main.path)}{suffix}"

    def _conventional(
        self, change_type: str, scope: str, description: str, changes: Sequence[FileChange], style: CommitStyle
    ) -> str:
        message = f"{change_type}({scope}): {description}" if style.include_scope else f"{change_type}: {description}"
        if style.include_footer and style.max_length - len(message) > FOOTER_BUDGET:
            message += f"\n\nRelated components: {scope}"
        return message

    def _gitmoji(
        self, change_type: str, scope: str, description: str, changes: Sequence[FileChange], style: CommitStyle
    ) -> str:
        emoji = self._config.emoji.get(change_type, self._config.emoji_fallback)
        message = f"{emoji} {description}"
        if style.include_scope:
            message = f"[{scope}] {message}"
        if style.include_footer and style.max_length - len(message) > FOOTER_BUDGET:
            message += f"\n\nType: {change_type}"
        return message

    def _detailed(
        self, change_type: str, scope: str, description: str, changes: Sequence[FileChange], style: CommitStyle
    ) -> str:
        message = f"{change_type}({scope}): {description}\n\nChanges:"
        for change in changes:
            bullet = f"\n- {ChangeStatus(change.status).value}: {change.path}"
            if len(message) + len(bullet) > style.max_length:
                message += MORE_CHANGES
                break
            message += bullet
        if style.include_footer:
            message += f"\n\nScope: {scope}"
        return message


def truncate(message: str, max_length: int) -> str:
    """
    Fit a message into ``max_length`` characters.

    A first line that is too long is hard-cut with an ellipsis; otherwise
    whole lines are kept while they fit and the rest is replaced by an
    ellipsis line.
    """
    if len(message) <= max_length:
        return message

    lines = message.split("\n")
    if len(lines[0]) > max_length:
        return lines[0][: max_length - len(ELLIPSIS)] + ELLIPSIS

    result = lines[0]
    for line in lines[1:]:
        if len(result) + len(line) + 1 > max_length - len(ELLIPSIS):
            return f"{result}\n{ELLIPSIS}"
        result += f"\n{line}"
    return result


def _top_level_segment(path: str) -> str:
    parts = path.split("/")
    return parts[0] if len(parts) > 1 else ROOT_SCOPE


def _component(path: str) -> str:
    filename = path.split("/")[-1]
    return re.sub(r"\.[^/.]+$", "", filename)


def compose(changes: List[FileChange], style: CommitStyle) -> str:
    return MessageComposer().compose(changes, style)
