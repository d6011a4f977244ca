from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import reduce
from typing import List, Mapping, Optional

from git_insight.analysis.rules import DEFAULT_CONFIG, HeuristicConfig
from git_insight.models import Analysis, PerformanceImpact, SecurityIssue

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FileScore:
    """Unclamped contribution of one file; addition is order-independent for the scores."""

    impact: int = 0
    complexity: int = 0
    security_issues: List[SecurityIssue] = field(default_factory=list)
    performance_details: List[str] = field(default_factory=list)

    @property
    def performance(self) -> int:
        return len(self.performance_details)

    def __add__(self, other: FileScore) -> FileScore:
        return FileScore(
            impact=self.impact + other.impact,
            complexity=self.complexity + other.complexity,
            security_issues=self.security_issues + other.security_issues,
            performance_details=self.performance_details + other.performance_details,
        )


class ImpactAnalyzer:
    """
    Heuristic scoring of file contents for impact, complexity, security and performance.

    The analyzer does no I/O. Callers pass a mapping of path to content,
    using ``None`` for files they could not read.
    """

    def __init__(self, config: HeuristicConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self._keyword_pattern = config.keyword_pattern if config.control_keywords else None
        self._structural_pattern = config.structural_pattern

    @property
    def config(self) -> HeuristicConfig:
        return self._config

    def analyze(self, file_contents: Mapping[str, Optional[str]], workers: Optional[int] = None) -> Analysis:
        """
        Score every file and combine the results.

        Args:
            file_contents: Path to file content, ``None`` for unreadable files.
            workers: Score files on a thread pool of this size when greater than 1.

        Returns:
            Analysis with the three numeric scores clamped to the configured cap.
        """
        items = list(file_contents.items())
        if workers and workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                scores = list(pool.map(lambda item: self.score_file(*item), items))
        else:
            scores = [self.score_file(path, content) for path, content in items]

        total = reduce(lambda left, right: left + right, scores, FileScore())
        return self._finalize(total)

    def score_file(self, path: str, content: Optional[str]) -> FileScore:
        if content is None:
            logger.warning("Could not read %s, skipping it in the analysis", path)
            return FileScore()

        return FileScore(
            impact=self.impact_score(content),
            complexity=self.complexity_score(content),
            security_issues=self.security_issues(content, path),
            performance_details=self.performance_details(content),
        )

    def impact_score(self, content: str) -> int:
        cfg = self._config
        line_count = len(content.split("\n"))
        token_count = len(self._structural_pattern.split(content))
        return math.floor((line_count * cfg.line_weight + token_count * cfg.token_weight) / cfg.impact_divisor)

    def complexity_score(self, content: str) -> int:
        cfg = self._config
        keyword_count = len(self._keyword_pattern.findall(content)) if self._keyword_pattern else 0
        nesting = max(line.count(cfg.nesting_char) for line in content.split("\n"))
        return math.floor(
            (keyword_count * cfg.keyword_weight + nesting * cfg.nesting_weight) * cfg.complexity_multiplier
        )

    def security_issues(self, content: str, location: str) -> List[SecurityIssue]:
        return [
            SecurityIssue(severity=rule.severity, description=rule.message, location=location)
            for rule in self._config.security_rules
            if rule.severity is not None and rule.matches(content)
        ]

    def performance_details(self, content: str) -> List[str]:
        return [rule.message for rule in self._config.performance_rules if rule.matches(content)]

    def _finalize(self, total: FileScore) -> Analysis:
        cap = self._config.score_cap
        return Analysis(
            impact_score=_clamp(total.impact, cap),
            complexity_score=_clamp(total.complexity, cap),
            security_issues=tuple(total.security_issues),
            performance_impact=PerformanceImpact(
                score=_clamp(total.performance, cap),
                details=tuple(total.performance_details),
            ),
        )


def _clamp(value: int, cap: int) -> int:
    return max(0, min(cap, value))
