from __future__ import annotations

from git_insight.analysis.analyzer import FileScore, ImpactAnalyzer
from git_insight.analysis.rules import (
    DEFAULT_CONFIG,
    DEFAULT_PERFORMANCE_RULES,
    DEFAULT_SECURITY_RULES,
    HeuristicConfig,
    Rule,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_PERFORMANCE_RULES",
    "DEFAULT_SECURITY_RULES",
    "FileScore",
    "HeuristicConfig",
    "ImpactAnalyzer",
    "Rule",
]
