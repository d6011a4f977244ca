from __future__ import annotations

from git_insight.messages.composer import ComposerConfig, MessageComposer, compose, truncate

__all__ = ["ComposerConfig", "MessageComposer", "compose", "truncate"]
