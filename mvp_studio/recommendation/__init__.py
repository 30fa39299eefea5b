"""Tool recommendation for wizard runs."""

from mvp_studio.recommendation.scorer import (
    ScoreBreakdown,
    compatible_tools,
    explain,
    find_insight,
    is_compatible,
    load_rules,
    recommend,
    score,
)

__all__ = [
    "ScoreBreakdown",
    "compatible_tools",
    "explain",
    "find_insight",
    "is_compatible",
    "load_rules",
    "recommend",
    "score",
]
