# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
Pytest configuration and fixtures for omnicompanion tests.

Shared fixtures for pattern store and autonomy controller tests.
"""

from __future__ import annotations

import random

import pytest

from omnicompanion.enums import EnumPatternOrigin
from omnicompanion.models import (
    AutonomySettings,
    ModelPatternMatch,
    ModelPatternStoreStats,
    ModelResponsePattern,
    ModelSituation,
    ModelTemplateVariables,
    PatternStoreSettings,
)
from omnicompanion.pattern_store import ResponsePatternStore

# =========================================================================
# Basic Sample Data Fixtures
# =========================================================================


@pytest.fixture
def correlation_id() -> str:
    """Provide a valid UUID test correlation ID for tracing."""
    return "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def morning_greeting() -> ModelSituation:
    """A first-time visitor greeting the companion in the morning."""
    return ModelSituation(
        intents=frozenset({"greeting"}),
        emotions=frozenset({"joy"}),
        depths=frozenset({"surface"}),
        time_of_day=frozenset({"morning"}),
        relationship_phases=frozenset({"stranger"}),
    )


@pytest.fixture
def morning_variables() -> ModelTemplateVariables:
    """Variables available for a morning request."""
    return ModelTemplateVariables(time_expression="early morning", visitor_name="Aki")


# =========================================================================
# Pattern Store Fixtures
# =========================================================================


@pytest.fixture
def empty_settings() -> PatternStoreSettings:
    """Store settings with seeding disabled."""
    return PatternStoreSettings(seed_on_init=False)


@pytest.fixture
def empty_store(empty_settings: PatternStoreSettings) -> ResponsePatternStore:
    """A pattern store with no patterns and a deterministic random source."""
    return ResponsePatternStore(empty_settings, rng=random.Random(1234))


@pytest.fixture
def seeded_store() -> ResponsePatternStore:
    """A pattern store loaded with the seed catalog."""
    return ResponsePatternStore(PatternStoreSettings(seed_on_init=True), rng=random.Random(1234))


def make_pattern(
    pattern_id: str,
    template: str = "Hello there... nice day",
    *,
    situation: ModelSituation | None = None,
    success_count: int = 0,
    use_count: int = 0,
    avg_satisfaction: float = 0.5,
    last_used: int = 0,
    origin: EnumPatternOrigin = EnumPatternOrigin.LEARNED,
) -> ModelResponsePattern:
    """Build a pattern for loading into a store under test."""
    return ModelResponsePattern(
        pattern_id=pattern_id,
        situation=situation if situation is not None else ModelSituation(),
        template=template,
        success_count=success_count,
        use_count=use_count,
        avg_satisfaction=avg_satisfaction,
        last_used=last_used,
        origin=origin,
    )


@pytest.fixture
def pattern_factory():
    """Expose make_pattern as a fixture."""
    return make_pattern


# =========================================================================
# Autonomy Controller Fixtures
# =========================================================================


class FakePatternStore:
    """Scriptable stand-in implementing ProtocolPatternStore.

    Returns ``next_match`` from every find_best_match call and records the
    calls the controller makes.
    """

    def __init__(self) -> None:
        self.next_match: ModelPatternMatch | None = None
        self.coverage_value = 0.0
        self.stats = ModelPatternStoreStats(
            total_patterns=0,
            seed_patterns=0,
            learned_patterns=0,
            avg_satisfaction=0.0,
        )
        self.cull_result = 0
        self.find_calls: list[int] = []
        self.feedback_calls: list[tuple[str, bool, float]] = []
        self.cull_calls = 0

    def find_best_match(self, situation, variables, tick, *, correlation_id=None):
        self.find_calls.append(tick)
        return self.next_match

    def feedback(self, pattern_id: str, success: bool, satisfaction: float) -> None:
        self.feedback_calls.append((pattern_id, success, satisfaction))

    def cull_low_quality(self) -> int:
        self.cull_calls += 1
        return self.cull_result

    def coverage(self) -> float:
        return self.coverage_value

    def get_stats(self) -> ModelPatternStoreStats:
        return self.stats

    def set_store_figures(
        self,
        *,
        coverage: float,
        total_patterns: int,
        avg_satisfaction: float,
    ) -> None:
        self.coverage_value = coverage
        self.stats = ModelPatternStoreStats(
            total_patterns=total_patterns,
            seed_patterns=0,
            learned_patterns=total_patterns,
            avg_satisfaction=avg_satisfaction,
        )


@pytest.fixture
def fake_store() -> FakePatternStore:
    return FakePatternStore()


@pytest.fixture
def autonomy_settings() -> AutonomySettings:
    """Controller settings with library defaults, independent of the environment."""
    return AutonomySettings(
        audit_interval=200,
        quality_drop_threshold=0.15,
        absolute_quality_floor=0.3,
        min_samples_for_demotion=10,
        recent_window=20,
        enable_auto_promotion=True,
        enable_auto_demotion=True,
    )
