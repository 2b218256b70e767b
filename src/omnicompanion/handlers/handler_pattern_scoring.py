# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure scoring functions over a pattern's usage statistics.

Reliability (used when ranking match candidates):
    success_rate * 0.4 + avg_satisfaction * 0.4 + min(0.2, use_count * 0.02)
    A never-used pattern gets a flat 0.3.

Value (used when evicting to enforce the store size cap):
    success_rate * 0.3 + avg_satisfaction * 0.4 + recency * 0.1
        + min(0.2, use_count * 0.01)
    where recency = 1 / (1 + max(0, last_used)).

Note that recency as defined favors patterns with a SMALL last_used tick.
The formula is kept as tuned; eviction order depends on it.
"""

from __future__ import annotations

from omnicompanion.constants import (
    MATCH_SCORE_WEIGHT,
    RELIABILITY_WEIGHT,
    UNUSED_PATTERN_RELIABILITY,
)
from omnicompanion.models import ModelResponsePattern


def pattern_reliability(pattern: ModelResponsePattern) -> float:
    """Reliability of a pattern in [0.0, 1.0]."""
    if pattern.use_count == 0:
        return UNUSED_PATTERN_RELIABILITY

    experience_bonus = min(0.2, pattern.use_count * 0.02)
    reliability = pattern.success_rate * 0.4 + pattern.avg_satisfaction * 0.4 + experience_bonus
    return min(1.0, reliability)


def blend_match_score(match_score: float, reliability: float) -> float:
    """Combine the raw situation score with reliability (0.7 / 0.3)."""
    return min(1.0, match_score * MATCH_SCORE_WEIGHT + reliability * RELIABILITY_WEIGHT)


def pattern_value(pattern: ModelResponsePattern) -> float:
    """Retention value of a pattern; the lowest values are evicted first."""
    recency = 1.0 / (1.0 + max(0, pattern.last_used))
    return (
        pattern.success_rate * 0.3
        + pattern.avg_satisfaction * 0.4
        + recency * 0.1
        + min(0.2, pattern.use_count * 0.01)
    )


__all__ = ["blend_match_score", "pattern_reliability", "pattern_value"]
