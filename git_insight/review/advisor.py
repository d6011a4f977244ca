from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from git_insight.models import Analysis, Feedback, FileChange, Recommendation, Severity, Suggestion


@dataclass(frozen=True, slots=True)
class AdvisorThresholds:
    refactor_complexity: int = 70
    suggest_complexity: int = 50
    praise_complexity: int = 30
    performance_score: int = 30
    large_change_count: int = 10
    medium_change_count: int = 5


DEFAULT_THRESHOLDS = AdvisorThresholds()

_SECURITY_PRIORITY: Dict[Severity, int] = {
    Severity.HIGH: 9,
    Severity.MEDIUM: 6,
    Severity.LOW: 3,
}


def recommendations(
    analysis: Analysis,
    changes: Sequence[FileChange],
    thresholds: AdvisorThresholds = DEFAULT_THRESHOLDS,
) -> List[Recommendation]:
    """Repository-level recommendations ordered by ascending priority."""
    result: List[Recommendation] = []

    if analysis.complexity_score > thresholds.refactor_complexity:
        result.append(
            Recommendation(
                type="refactor",
                description="High code complexity detected, consider refactoring",
                priority=1,
            )
        )

    if analysis.security_issues:
        result.append(
            Recommendation(type="review", description="Security issues found, review required", priority=0)
        )

    if len(changes) > thresholds.large_change_count:
        result.append(
            Recommendation(
                type="commit",
                description="Large number of changes, consider breaking into smaller commits",
                priority=2,
            )
        )

    return sorted(result, key=lambda item: item.priority)


def suggest_improvements(
    analysis: Analysis,
    paths: Sequence[str],
    thresholds: AdvisorThresholds = DEFAULT_THRESHOLDS,
) -> List[Suggestion]:
    location = ", ".join(paths)
    suggestions: List[Suggestion] = []

    if analysis.complexity_score > thresholds.suggest_complexity:
        suggestions.append(
            Suggestion(
                type="quality",
                description="Consider breaking down complex functions",
                location=location,
                priority=analysis.complexity_score / 10,
            )
        )

    for issue in analysis.security_issues:
        suggestions.append(
            Suggestion(
                type="security",
                description=issue.description,
                location=issue.location,
                priority=_SECURITY_PRIORITY.get(Severity(issue.severity), 3),
            )
        )

    performance = analysis.performance_impact
    if performance.score > thresholds.performance_score:
        for detail in performance.details:
            suggestions.append(
                Suggestion(type="performance", description=detail, location=location, priority=performance.score / 10)
            )

    return suggestions


def review_feedback(
    analysis: Analysis,
    paths: Sequence[str],
    thresholds: AdvisorThresholds = DEFAULT_THRESHOLDS,
) -> List[Feedback]:
    """Reviewer-style feedback: complexity verdict, then security issues, then performance notes."""
    location = ", ".join(paths)
    feedback: List[Feedback] = []

    if analysis.complexity_score > thresholds.refactor_complexity:
        feedback.append(
            Feedback(
                type="issue",
                message="Code is too complex, needs simplification",
                location=location,
                severity=Severity.HIGH,
            )
        )
    elif analysis.complexity_score < thresholds.praise_complexity:
        feedback.append(
            Feedback(
                type="praise",
                message="Good code structure and complexity",
                location=location,
                severity=Severity.LOW,
            )
        )

    for issue in analysis.security_issues:
        feedback.append(
            Feedback(type="issue", message=issue.description, location=issue.location, severity=issue.severity)
        )

    for detail in analysis.performance_impact.details:
        feedback.append(Feedback(type="suggestion", message=detail, location=location, severity=Severity.MEDIUM))

    return feedback


def change_impact(paths: Sequence[str], thresholds: AdvisorThresholds = DEFAULT_THRESHOLDS) -> str:
    if len(paths) > thresholds.large_change_count:
        return "high"
    if len(paths) > thresholds.medium_change_count:
        return "medium"
    return "low"


def affected_components(paths: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(path.split("/")[0] for path in paths))
