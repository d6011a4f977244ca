from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Severity(str, Enum):
    """Severity level for heuristic findings."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class SecurityIssue:
    """A single security finding located in one file."""

    severity: Severity
    description: str
    location: str


@dataclass(frozen=True, slots=True)
class PerformanceImpact:
    score: int = 0
    details: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Analysis:
    """Combined impact, complexity, security and performance results for a file set."""

    impact_score: int = 0
    complexity_score: int = 0
    security_issues: Tuple[SecurityIssue, ...] = ()
    performance_impact: PerformanceImpact = field(default_factory=PerformanceImpact)

    @property
    def high_count(self) -> int:
        return sum(1 for issue in self.security_issues if issue.severity == Severity.HIGH)

    @property
    def risk_level(self) -> str:
        """Overall risk assessment from the security findings."""
        if self.high_count > 0:
            return "high"
        if any(issue.severity == Severity.MEDIUM for issue in self.security_issues):
            return "medium"
        if self.security_issues:
            return "low"
        return "none"


@dataclass(frozen=True, slots=True)
class Recommendation:
    """Repository-level advice; lower priority values come first."""

    type: str
    description: str
    priority: int


@dataclass(frozen=True, slots=True)
class Suggestion:
    type: str
    description: str
    location: str
    priority: float


@dataclass(frozen=True, slots=True)
class Feedback:
    type: str
    message: str
    location: str
    severity: Severity
