# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure situation matching handler functions.

This module scores how well a stored pattern's situation fits the current
situation. All functions are deterministic and side-effect free so the
pattern store can call them freely and tests can assert exact values.

Scoring Algorithm (score_situation):
    Weighted sum over six dimensions (weights sum to 1.0):
        intents 0.30, emotions 0.20, depths 0.15, time_of_day 0.10,
        relationship_phases 0.15, keywords 0.10

    Per dimension:
        - pattern set empty       -> half weight (unconstrained)
        - any label intersects    -> full weight
        - emotions only: no direct hit but same coarse group -> half weight
        - keywords: weight * fraction of pattern keywords that are a
          substring of, or contain, some current keyword

Overlap Algorithm (situation_overlap):
    Mean over the same six dimensions of a Jaccard-like overlap
    (|a & b| / max(|a|, |b|)), 1.0 when both sides are empty and 0.5 when
    exactly one side is empty. Used for duplicate detection on extraction.

Usage:
    from omnicompanion.handlers.handler_situation_matching import score_situation

    score = score_situation(pattern.situation, current_situation)
"""

from __future__ import annotations

import math
from collections.abc import Set

from omnicompanion.constants import (
    EMOTION_GROUP_CREDIT,
    EMOTION_GROUPS,
    SITUATION_DIMENSION_WEIGHTS,
    UNCONSTRAINED_DIMENSION_CREDIT,
)
from omnicompanion.models import SITUATION_DIMENSIONS, ModelSituation


def score_situation(
    pattern_situation: ModelSituation,
    current_situation: ModelSituation,
) -> float:
    """Score a pattern's situation against the current situation.

    Args:
        pattern_situation: Situation the pattern was learned for.
        current_situation: Situation of the incoming request.

    Returns:
        Score in [0.0, 1.0]. Identical inputs always produce identical output.
    """
    # Boundary totals such as 0.8 must come out exact, not 0.7999999999999999.
    score = math.fsum(
        SITUATION_DIMENSION_WEIGHTS[dimension]
        * _dimension_credit(
            dimension,
            pattern_situation.dimension(dimension),
            current_situation.dimension(dimension),
        )
        for dimension in SITUATION_DIMENSIONS
    )

    return min(1.0, max(0.0, score))


def _dimension_credit(
    dimension: str,
    pattern_labels: Set[str],
    current_labels: Set[str],
) -> float:
    """Return the fraction (0.0-1.0) of a dimension's weight to award."""
    if not pattern_labels:
        return UNCONSTRAINED_DIMENSION_CREDIT

    if dimension == "keywords":
        return keyword_match_fraction(pattern_labels, current_labels)

    if not pattern_labels.isdisjoint(current_labels):
        return 1.0

    if dimension == "emotions":
        return emotion_group_similarity(pattern_labels, current_labels)

    return 0.0


def keyword_match_fraction(
    pattern_keywords: Set[str],
    current_keywords: Set[str],
) -> float:
    """Fraction of pattern keywords found in (or containing) a current keyword.

    Matching is crude lexical containment in either direction, e.g. the
    pattern keyword "star" matches the current keyword "stars".
    """
    if not pattern_keywords:
        return 0.0

    matched = sum(
        1
        for keyword in pattern_keywords
        if any(keyword in current or current in keyword for current in current_keywords)
    )
    return min(1.0, matched / len(pattern_keywords))


def emotion_group_similarity(
    pattern_emotions: Set[str],
    current_emotions: Set[str],
) -> float:
    """Return partial credit when both sides share a coarse emotion group.

    Returns:
        EMOTION_GROUP_CREDIT (0.5) if some group contains an emotion from each
        side, otherwise 0.0.
    """
    for group in EMOTION_GROUPS.values():
        if not group.isdisjoint(pattern_emotions) and not group.isdisjoint(current_emotions):
            return EMOTION_GROUP_CREDIT
    return 0.0


def situation_overlap(first: ModelSituation, second: ModelSituation) -> float:
    """Mean per-dimension overlap between two situations.

    Symmetric in its arguments. Used to decide whether a newly extracted
    template duplicates an existing pattern.

    Returns:
        Overlap in [0.0, 1.0].
    """
    total = 0.0
    for dimension in SITUATION_DIMENSIONS:
        total += _set_overlap(first.dimension(dimension), second.dimension(dimension))
    return total / len(SITUATION_DIMENSIONS)


def _set_overlap(first: Set[str], second: Set[str]) -> float:
    if not first and not second:
        return 1.0
    if not first or not second:
        return UNCONSTRAINED_DIMENSION_CREDIT
    return len(first & second) / max(len(first), len(second))


__all__ = [
    "emotion_group_similarity",
    "keyword_match_fraction",
    "score_situation",
    "situation_overlap",
]
