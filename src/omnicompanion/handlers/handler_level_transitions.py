# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure gate functions for autonomy promotion and demotion.

Promotion Gates (all must hold, checked for the NEXT level only):
    1. Dwell time: ticks at the current level >= min_ticks_at_previous_level
    2. Coverage: pattern store coverage >= min_coverage
    3. Pattern count: stored patterns >= min_pattern_count
    4. Satisfaction: mean avg_satisfaction >= min_avg_satisfaction
    5. Bypass rate: bypass_successes / bypass_attempts >= min_bypass_success_rate.
       With zero attempts the gate fails whenever the required rate is > 0,
       so a level that needs bypass evidence cannot be reached before at
       least one bypass has been tried.

Demotion Triggers (need >= min_samples quality samples):
    1. Quality drop: mean(older samples) - mean(newest recent_window samples)
       > quality_drop_threshold. Skipped when there are no older samples.
    2. Quality floor: mean(newest recent_window samples) < absolute floor.

Promotion gates are deliberately much slower to satisfy than the demotion
triggers: the controller fails closed toward the generator.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final, Literal

from omnicompanion.enums import EnumAutonomyLevel
from omnicompanion.models import ModelTransitionCondition

PromotionGate = Literal[
    "dwell_time",
    "coverage",
    "pattern_count",
    "avg_satisfaction",
    "bypass_success_rate",
]

TRANSITION_CONDITIONS: Final[dict[EnumAutonomyLevel, ModelTransitionCondition]] = {
    EnumAutonomyLevel.GENERATOR_PRIMARY: ModelTransitionCondition(
        min_coverage=0.2,
        min_avg_satisfaction=0.5,
        min_pattern_count=20,
        min_bypass_success_rate=0.0,
        min_ticks_at_previous_level=100,
    ),
    EnumAutonomyLevel.HYBRID: ModelTransitionCondition(
        min_coverage=0.4,
        min_avg_satisfaction=0.6,
        min_pattern_count=80,
        min_bypass_success_rate=0.6,
        min_ticks_at_previous_level=500,
    ),
    EnumAutonomyLevel.PATTERN_PRIMARY: ModelTransitionCondition(
        min_coverage=0.6,
        min_avg_satisfaction=0.7,
        min_pattern_count=200,
        min_bypass_success_rate=0.75,
        min_ticks_at_previous_level=1000,
    ),
    EnumAutonomyLevel.AUTONOMOUS: ModelTransitionCondition(
        min_coverage=0.8,
        min_avg_satisfaction=0.8,
        min_pattern_count=400,
        min_bypass_success_rate=0.9,
        min_ticks_at_previous_level=2000,
    ),
}
"""Condition for promoting INTO each level. FULL_GENERATOR has none."""


def failed_promotion_gates(
    condition: ModelTransitionCondition,
    *,
    ticks_at_level: int,
    coverage: float,
    pattern_count: int,
    avg_satisfaction: float,
    bypass_attempts: int,
    bypass_successes: int,
) -> list[PromotionGate]:
    """Return the names of every promotion gate that is not satisfied.

    Pure function. An empty list means the transition is allowed.
    """
    failed: list[PromotionGate] = []

    if ticks_at_level < condition.min_ticks_at_previous_level:
        failed.append("dwell_time")
    if coverage < condition.min_coverage:
        failed.append("coverage")
    if pattern_count < condition.min_pattern_count:
        failed.append("pattern_count")
    if avg_satisfaction < condition.min_avg_satisfaction:
        failed.append("avg_satisfaction")

    if bypass_attempts > 0:
        if bypass_successes / bypass_attempts < condition.min_bypass_success_rate:
            failed.append("bypass_success_rate")
    elif condition.min_bypass_success_rate > 0:
        failed.append("bypass_success_rate")

    return failed


def detect_quality_degradation(
    samples: Sequence[float],
    *,
    min_samples: int = 10,
    recent_window: int = 20,
    drop_threshold: float = 0.15,
    absolute_floor: float = 0.3,
) -> str | None:
    """Decide whether the quality window warrants a demotion.

    Args:
        samples: Quality samples, oldest first.
        min_samples: Below this many samples nothing is decided.
        recent_window: Number of newest samples forming the recent mean.
        drop_threshold: Older-minus-recent drop that triggers demotion.
        absolute_floor: Recent mean below this always triggers demotion.

    Returns:
        A short reason string when demotion is warranted, otherwise None.
    """
    if len(samples) < min_samples:
        return None

    recent = list(samples[-recent_window:])
    older = list(samples[:-recent_window])
    recent_avg = sum(recent) / len(recent)

    if older:
        older_avg = sum(older) / len(older)
        if older_avg - recent_avg > drop_threshold:
            return f"quality_drop: {older_avg:.2f} -> {recent_avg:.2f}"

    if recent_avg < absolute_floor:
        return f"quality_floor: recent mean {recent_avg:.2f}"

    return None


__all__ = [
    "TRANSITION_CONDITIONS",
    "PromotionGate",
    "detect_quality_degradation",
    "failed_promotion_gates",
]
