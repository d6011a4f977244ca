from __future__ import annotations

from git_insight.review.advisor import (
    AdvisorThresholds,
    affected_components,
    change_impact,
    recommendations,
    review_feedback,
    suggest_improvements,
)

__all__ = [
    "AdvisorThresholds",
    "affected_components",
    "change_impact",
    "recommendations",
    "review_feedback",
    "suggest_improvements",
]
