# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Unit tests for AutonomyController.

Test cases cover:
- Strategy selection per level, strict score thresholds, fail-closed fallback
- Call counters
- Quality reporting and pattern feedback
- Audits, one-step promotion and demotion
- Manual control and metrics
"""

from __future__ import annotations

import logging

import pytest

from omnicompanion.autonomy import STRATEGY_SCORE_THRESHOLDS, AutonomyController
from omnicompanion.enums import EnumAutonomyLevel, EnumStrategyType
from omnicompanion.models import (
    AutonomySettings,
    ModelGeneratorOnlyStrategy,
    ModelGeneratorWithHintStrategy,
    ModelPatternDraftRefineStrategy,
    ModelPatternOnlyStrategy,
    ModelPatternWithAuditStrategy,
    ModelPatternMatch,
    ModelSituation,
    ModelTemplateVariables,
)

_CONTROLLER_LOGGER = "omnicompanion.autonomy.controller"

SITUATION = ModelSituation(intents=frozenset({"greeting"}))
VARIABLES = ModelTemplateVariables()


def make_match(score: float, text: str = "Good morning...") -> ModelPatternMatch:
    """Build a match for pat_1 whose blended score is ``score``."""
    return ModelPatternMatch(
        pattern_id="pat_1",
        score=score,
        match_score=score,
        reliability=score,
        expanded_text=text,
    )


@pytest.fixture
def controller(fake_store, autonomy_settings: AutonomySettings) -> AutonomyController:
    return AutonomyController(fake_store, autonomy_settings)


def _counters(controller: AutonomyController) -> tuple[int, int, int, int]:
    state = controller.to_state()
    return (
        state.generator_calls,
        state.pattern_calls,
        state.bypass_count,
        state.bypass_attempts,
    )


# =============================================================================
# decide
# =============================================================================


@pytest.mark.unit
class TestDecide:
    """Tests for strategy selection."""

    def test_full_generator_ignores_patterns(
        self, controller: AutonomyController, fake_store
    ) -> None:
        """The store is still queried, but the reply comes from the generator."""
        fake_store.next_match = make_match(0.95)

        strategy = controller.decide(SITUATION, VARIABLES, tick=3)

        assert isinstance(strategy, ModelGeneratorOnlyStrategy)
        assert fake_store.find_calls == [3]
        assert _counters(controller) == (1, 0, 0, 0)

    @pytest.mark.parametrize(
        ("level", "expected_type", "counters"),
        [
            (EnumAutonomyLevel.GENERATOR_PRIMARY, ModelGeneratorWithHintStrategy, (1, 1, 0, 0)),
            (EnumAutonomyLevel.HYBRID, ModelPatternDraftRefineStrategy, (1, 1, 0, 0)),
            (EnumAutonomyLevel.PATTERN_PRIMARY, ModelPatternWithAuditStrategy, (1, 1, 0, 1)),
            (EnumAutonomyLevel.AUTONOMOUS, ModelPatternOnlyStrategy, (0, 1, 1, 1)),
        ],
    )
    def test_strategy_per_level(
        self,
        controller: AutonomyController,
        fake_store,
        level: EnumAutonomyLevel,
        expected_type: type,
        counters: tuple[int, int, int, int],
    ) -> None:
        fake_store.next_match = make_match(0.85, text="Good morning... it's dawn.")
        controller.set_level(level, tick=0)

        strategy = controller.decide(SITUATION, VARIABLES, tick=1)

        assert isinstance(strategy, expected_type)
        assert strategy.pattern_id == "pat_1"
        assert _counters(controller) == counters

    def test_strategy_carries_expanded_text(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.next_match = make_match(0.85, text="Good night... sweet dreams")
        controller.set_level(EnumAutonomyLevel.AUTONOMOUS, tick=0)

        strategy = controller.decide(SITUATION, VARIABLES, tick=1)

        assert isinstance(strategy, ModelPatternOnlyStrategy)
        assert strategy.response == "Good night... sweet dreams"

    @pytest.mark.parametrize("level", list(STRATEGY_SCORE_THRESHOLDS))
    def test_threshold_is_strict(
        self,
        controller: AutonomyController,
        fake_store,
        level: EnumAutonomyLevel,
    ) -> None:
        """A score equal to the level threshold falls back to the generator."""
        fake_store.next_match = make_match(STRATEGY_SCORE_THRESHOLDS[level])
        controller.set_level(level, tick=0)

        strategy = controller.decide(SITUATION, VARIABLES, tick=1)

        assert strategy.strategy_type is EnumStrategyType.GENERATOR_ONLY

    def test_hybrid_accepts_lower_scores_than_generator_primary(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.next_match = make_match(0.55)

        controller.set_level(EnumAutonomyLevel.GENERATOR_PRIMARY, tick=0)
        at_generator_primary = controller.decide(SITUATION, VARIABLES, tick=1)
        controller.set_level(EnumAutonomyLevel.HYBRID, tick=1)
        at_hybrid = controller.decide(SITUATION, VARIABLES, tick=2)

        assert isinstance(at_generator_primary, ModelGeneratorOnlyStrategy)
        assert isinstance(at_hybrid, ModelPatternDraftRefineStrategy)

    def test_autonomous_without_match_fails_closed(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.next_match = None
        controller.set_level(EnumAutonomyLevel.AUTONOMOUS, tick=0)

        strategy = controller.decide(SITUATION, VARIABLES, tick=1)

        assert isinstance(strategy, ModelGeneratorOnlyStrategy)
        assert _counters(controller) == (1, 0, 0, 0)


# =============================================================================
# report
# =============================================================================


@pytest.mark.unit
class TestReport:
    """Tests for quality reporting."""

    def test_quality_recorded(self, controller: AutonomyController) -> None:
        controller.report(0.7, pattern_used=False)

        assert controller.quality_samples == [0.7]

    def test_pattern_feedback_uses_quality_as_success(
        self, controller: AutonomyController, fake_store
    ) -> None:
        controller.report(0.8, pattern_used=True, pattern_id="pat_1")
        controller.report(0.5, pattern_used=True, pattern_id="pat_1")

        assert fake_store.feedback_calls == [("pat_1", True, 0.8), ("pat_1", False, 0.5)]

    def test_explicit_success_counts_bypass_success(
        self, controller: AutonomyController, fake_store
    ) -> None:
        controller.report(0.4, pattern_used=True, pattern_id="pat_1", success=True)

        assert fake_store.feedback_calls == [("pat_1", True, 0.4)]
        assert controller.to_state().bypass_successes == 1

    def test_no_feedback_without_pattern(
        self, controller: AutonomyController, fake_store
    ) -> None:
        controller.report(0.9, pattern_used=False)

        assert fake_store.feedback_calls == []

    def test_out_of_range_quality_clamped(
        self, controller: AutonomyController, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=_CONTROLLER_LOGGER):
            controller.report(1.5, pattern_used=False)

        assert controller.quality_samples == [1.0]
        assert caplog.records

    def test_quality_window_is_bounded(self, fake_store) -> None:
        controller = AutonomyController(fake_store, AutonomySettings(quality_window_size=5))

        for i in range(8):
            controller.report(i / 10, pattern_used=False)

        assert controller.quality_samples == pytest.approx([0.3, 0.4, 0.5, 0.6, 0.7])


# =============================================================================
# evaluate
# =============================================================================


@pytest.mark.unit
class TestEvaluate:
    """Tests for audits and level transitions."""

    def test_promotes_to_generator_primary(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.set_store_figures(coverage=0.3, total_patterns=25, avg_satisfaction=0.6)

        event = controller.evaluate(tick=100)

        assert event is not None
        assert event.direction == "promoted"
        assert event.previous_level is EnumAutonomyLevel.FULL_GENERATOR
        assert event.current_level is EnumAutonomyLevel.GENERATOR_PRIMARY
        assert controller.current_level() is EnumAutonomyLevel.GENERATOR_PRIMARY

    def test_dwell_time_blocks_promotion(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.set_store_figures(coverage=0.3, total_patterns=25, avg_satisfaction=0.6)

        assert controller.evaluate(tick=99) is None
        assert controller.current_level() is EnumAutonomyLevel.FULL_GENERATOR

    def test_promotion_moves_one_level_at_a_time(
        self, controller: AutonomyController, fake_store
    ) -> None:
        """Even when every gate of every level is met, one call moves one step."""
        fake_store.set_store_figures(coverage=1.0, total_patterns=1000, avg_satisfaction=1.0)
        controller.load_state({"bypass_attempts": 10, "bypass_successes": 10})

        first = controller.evaluate(tick=5000)

        assert first is not None
        assert first.current_level is EnumAutonomyLevel.GENERATOR_PRIMARY

    def test_dwell_time_resets_on_promotion(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.set_store_figures(coverage=1.0, total_patterns=1000, avg_satisfaction=1.0)
        controller.load_state({"bypass_attempts": 10, "bypass_successes": 10})

        controller.evaluate(tick=5000)
        second = controller.evaluate(tick=5001)
        third = controller.evaluate(tick=5500)

        assert second is None
        assert third is not None
        assert third.current_level is EnumAutonomyLevel.HYBRID

    def test_hybrid_requires_bypass_attempts(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.set_store_figures(coverage=0.5, total_patterns=100, avg_satisfaction=0.7)
        controller.set_level(EnumAutonomyLevel.GENERATOR_PRIMARY, tick=0)

        assert controller.evaluate(tick=600) is None
        assert controller.current_level() is EnumAutonomyLevel.GENERATOR_PRIMARY

    def test_demotes_on_quality_floor(
        self, controller: AutonomyController, caplog: pytest.LogCaptureFixture
    ) -> None:
        controller.set_level(EnumAutonomyLevel.PATTERN_PRIMARY, tick=0)
        for _ in range(10):
            controller.report(0.1, pattern_used=False)

        with caplog.at_level(logging.INFO, logger=_CONTROLLER_LOGGER):
            event = controller.evaluate(tick=50)

        assert event is not None
        assert event.direction == "demoted"
        assert event.current_level is EnumAutonomyLevel.HYBRID
        assert event.reason.startswith("quality_floor")
        assert controller.quality_samples == []
        assert any("demoted" in r.message for r in caplog.records)

    def test_demotes_on_relative_drop(self, controller: AutonomyController) -> None:
        controller.set_level(EnumAutonomyLevel.AUTONOMOUS, tick=0)
        for quality in [0.9] * 10 + [0.6] * 20:
            controller.report(quality, pattern_used=False)

        event = controller.evaluate(tick=50)

        assert event is not None
        assert event.current_level is EnumAutonomyLevel.PATTERN_PRIMARY
        assert event.reason.startswith("quality_drop")

    def test_no_demotion_below_full_generator(self, controller: AutonomyController) -> None:
        for _ in range(10):
            controller.report(0.0, pattern_used=False)

        assert controller.evaluate(tick=50) is None
        assert controller.current_level() is EnumAutonomyLevel.FULL_GENERATOR

    def test_demotion_can_be_disabled(self, fake_store) -> None:
        controller = AutonomyController(fake_store, AutonomySettings(enable_auto_demotion=False))
        controller.set_level(EnumAutonomyLevel.HYBRID, tick=0)
        for _ in range(10):
            controller.report(0.0, pattern_used=False)

        assert controller.evaluate(tick=50) is None
        assert controller.current_level() is EnumAutonomyLevel.HYBRID

    def test_promotion_can_be_disabled(self, fake_store) -> None:
        controller = AutonomyController(fake_store, AutonomySettings(enable_auto_promotion=False))
        fake_store.set_store_figures(coverage=1.0, total_patterns=1000, avg_satisfaction=1.0)

        assert controller.evaluate(tick=5000) is None

    def test_audit_runs_on_interval(
        self, controller: AutonomyController, fake_store
    ) -> None:
        controller.evaluate(tick=199)
        controller.evaluate(tick=200)
        controller.evaluate(tick=300)
        controller.evaluate(tick=400)

        history = controller.audit_history
        assert [record.tick for record in history] == [200, 400]
        assert history[0].avg_quality == pytest.approx(0.5)
        assert fake_store.cull_calls == 2

    def test_audit_records_average_quality(self, controller: AutonomyController) -> None:
        controller.report(0.6, pattern_used=False)
        controller.report(0.8, pattern_used=False)

        controller.evaluate(tick=200)

        assert controller.audit_history[-1].avg_quality == pytest.approx(0.7)


# =============================================================================
# Manual control and metrics
# =============================================================================


@pytest.mark.unit
class TestManualControl:
    """Tests for reset, set_level and metrics."""

    def test_reset_clears_counters_keeps_audits(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.next_match = make_match(0.9)
        controller.set_level(EnumAutonomyLevel.AUTONOMOUS, tick=0)
        controller.decide(SITUATION, VARIABLES, tick=1)
        controller.report(0.9, pattern_used=True, pattern_id="pat_1", success=True)
        controller.evaluate(tick=200)

        controller.reset_to_full_generator(tick=250)

        state = controller.to_state()
        assert state.current_level is EnumAutonomyLevel.FULL_GENERATOR
        assert state.level_entered_tick == 250
        assert (state.generator_calls, state.pattern_calls, state.bypass_count) == (0, 0, 0)
        assert (state.bypass_attempts, state.bypass_successes) == (0, 0)
        assert state.quality_samples == []
        assert len(state.audit_history) == 1

    def test_metrics_reflect_store_and_counters(
        self, controller: AutonomyController, fake_store
    ) -> None:
        fake_store.set_store_figures(coverage=0.25, total_patterns=30, avg_satisfaction=0.65)
        fake_store.next_match = None
        controller.decide(SITUATION, VARIABLES, tick=1)

        metrics = controller.metrics()

        assert metrics.level is EnumAutonomyLevel.FULL_GENERATOR
        assert metrics.coverage == pytest.approx(0.25)
        assert metrics.confidence == pytest.approx(0.65)
        assert metrics.generator_calls == 1
        assert metrics.avg_quality == pytest.approx(0.5)


@pytest.mark.unit
def test_hybrid_promotes_to_pattern_primary_only(fake_store) -> None:
    """All PatternPrimary gates met promotes one step, never straight to Autonomous."""
    fake_store.set_store_figures(coverage=0.65, total_patterns=250, avg_satisfaction=0.75)
    controller = AutonomyController(fake_store, AutonomySettings())
    controller.set_level(EnumAutonomyLevel.HYBRID, tick=0)
    controller.load_state({"bypass_attempts": 10, "bypass_successes": 8})

    event = controller.evaluate(tick=2000)

    assert event is not None
    assert event.previous_level is EnumAutonomyLevel.HYBRID
    assert event.current_level is EnumAutonomyLevel.PATTERN_PRIMARY
    assert controller.current_level() is EnumAutonomyLevel.PATTERN_PRIMARY
