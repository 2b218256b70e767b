# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Shared Constants for OmniCompanion.

This module defines constants used across the pattern store and the autonomy
controller so that scoring weights and thresholds live in one place.

Usage:
    from omnicompanion.constants import SITUATION_DIMENSION_WEIGHTS

    weight = SITUATION_DIMENSION_WEIGHTS["intents"]
"""

from typing import Final

# =============================================================================
# Situation Matching Weights
# =============================================================================

SITUATION_DIMENSION_WEIGHTS: Final[dict[str, float]] = {
    "intents": 0.30,
    "emotions": 0.20,
    "depths": 0.15,
    "time_of_day": 0.10,
    "relationship_phases": 0.15,
    "keywords": 0.10,
}
"""
Per-dimension weights used by the situation matcher.

The weights sum to 1.0, so the accumulated score is already normalized.
Keys match the field names of ModelSituation.
"""

UNCONSTRAINED_DIMENSION_CREDIT: Final[float] = 0.5
"""Fraction of a dimension's weight awarded when the pattern leaves it empty."""

EMOTION_GROUP_CREDIT: Final[float] = 0.5
"""Fraction of the emotion weight awarded for a same-group (not exact) match."""

EMOTION_GROUPS: Final[dict[str, frozenset[str]]] = {
    "positive": frozenset({"joy", "warmth", "gratitude", "contentment"}),
    "calm": frozenset({"peace", "serenity", "contentment"}),
    "excited": frozenset({"excitement", "anticipation", "curiosity", "wonder"}),
    "sad": frozenset({"sadness", "melancholy", "loneliness", "nostalgia"}),
    "negative": frozenset({"frustration", "fear", "unease", "anxiety"}),
    "neutral": frozenset({"confusion", "boredom", "wonder"}),
}
"""
Coarse emotion groups used as a fallback when emotions do not intersect.

Groups deliberately overlap (e.g. "wonder" is both excited and neutral).
"""

# =============================================================================
# Reliability and Pattern Value
# =============================================================================

MATCH_SCORE_WEIGHT: Final[float] = 0.7
"""Weight of the raw situation score in the final blended match score."""

RELIABILITY_WEIGHT: Final[float] = 0.3
"""Weight of the pattern reliability term in the final blended match score."""

UNUSED_PATTERN_RELIABILITY: Final[float] = 0.3
"""Reliability assigned to a pattern that has never been used."""

SATISFACTION_EMA_RETAIN: Final[float] = 0.8
"""Weight of the previous avg_satisfaction in the feedback moving average."""

# =============================================================================
# Template Expansion
# =============================================================================

MIN_EXPANDED_LENGTH: Final[int] = 3
"""Expanded text shorter than this (after clause repair) is unusable."""

UNPARAMETERIZED_TEMPLATE_MAX_LENGTH: Final[int] = 50
"""Responses longer than this must contain at least one placeholder to be learned."""

# =============================================================================
# Quality Feedback
# =============================================================================

DEFAULT_SUCCESS_QUALITY_THRESHOLD: Final[float] = 0.5
"""Quality above which a pattern use counts as a success when unspecified."""

NEUTRAL_QUALITY: Final[float] = 0.5
"""Quality reported for an empty window (audits and metrics)."""

COVERAGE_MIN_SATISFACTION: Final[float] = 0.5
"""Patterns below this avg_satisfaction do not count toward coverage."""

COVERAGE_DIMENSION_WEIGHTS: Final[dict[str, float]] = {
    "intents": 0.4,
    "emotions": 0.3,
    "depths": 0.3,
}
"""Weights combining per-dimension coverage rates into one coverage figure."""

TOP_PATTERNS_IN_STATS: Final[int] = 5
"""Number of top patterns reported by the store statistics."""

STATS_TEMPLATE_PREVIEW_LENGTH: Final[int] = 50
"""Templates are truncated to this many characters in store statistics."""


__all__ = [
    "COVERAGE_DIMENSION_WEIGHTS",
    "COVERAGE_MIN_SATISFACTION",
    "DEFAULT_SUCCESS_QUALITY_THRESHOLD",
    "EMOTION_GROUPS",
    "EMOTION_GROUP_CREDIT",
    "MATCH_SCORE_WEIGHT",
    "MIN_EXPANDED_LENGTH",
    "NEUTRAL_QUALITY",
    "RELIABILITY_WEIGHT",
    "SATISFACTION_EMA_RETAIN",
    "SITUATION_DIMENSION_WEIGHTS",
    "STATS_TEMPLATE_PREVIEW_LENGTH",
    "TOP_PATTERNS_IN_STATS",
    "UNCONSTRAINED_DIMENSION_CREDIT",
    "UNPARAMETERIZED_TEMPLATE_MAX_LENGTH",
    "UNUSED_PATTERN_RELIABILITY",
]
