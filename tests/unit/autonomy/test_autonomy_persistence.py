# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Unit tests for AutonomyController persistence and the end-to-end loop."""

from __future__ import annotations

import json
import logging
import random

import pytest

from omnicompanion import AutonomyController, ResponsePatternStore
from omnicompanion.enums import EnumAutonomyLevel
from omnicompanion.handlers import augment_prompt, needs_generator
from omnicompanion.models import (
    AutonomySettings,
    ModelAutonomyState,
    ModelPatternOnlyStrategy,
    ModelPatternStoreState,
    ModelSituation,
    ModelTemplateVariables,
    PatternStoreSettings,
)

pytestmark = pytest.mark.unit


def _busy_controller(fake_store) -> AutonomyController:
    controller = AutonomyController(fake_store, AutonomySettings())
    controller.set_level(EnumAutonomyLevel.HYBRID, tick=40)
    for quality in (0.6, 0.7, 0.8):
        controller.report(quality, pattern_used=False)
    controller.evaluate(tick=250)
    return controller


def test_round_trip(fake_store) -> None:
    controller = _busy_controller(fake_store)
    data = controller.to_dict()

    restored = AutonomyController.from_state(fake_store, json.loads(json.dumps(data)))

    assert restored.to_dict() == data
    assert restored.current_level() is EnumAutonomyLevel.HYBRID
    assert restored.quality_samples == pytest.approx([0.6, 0.7, 0.8])
    assert len(restored.audit_history) == 1


def test_level_serialized_by_name(fake_store) -> None:
    data = _busy_controller(fake_store).to_dict()

    assert data["current_level"] == "hybrid"


def test_none_document_gives_fresh_controller(fake_store) -> None:
    controller = AutonomyController.from_state(fake_store, None)

    assert controller.to_state() == ModelAutonomyState()


def test_unknown_level_falls_back_to_default(
    fake_store, caplog: pytest.LogCaptureFixture
) -> None:
    """A malformed field is defaulted; the rest of the document still loads."""
    document = {"current_level": "SUPREME", "generator_calls": 12, "quality_samples": [0.4]}

    with caplog.at_level(logging.WARNING):
        controller = AutonomyController.from_state(fake_store, document)

    state = controller.to_state()
    assert state.current_level is EnumAutonomyLevel.FULL_GENERATOR
    assert state.generator_calls == 12
    assert state.quality_samples == [0.4]
    assert any("current_level" in r.message for r in caplog.records)


def test_partial_document_keeps_current_values(fake_store) -> None:
    controller = _busy_controller(fake_store)

    controller.load_state({"generator_calls": 99})

    state = controller.to_state()
    assert state.generator_calls == 99
    assert state.current_level is EnumAutonomyLevel.HYBRID


def test_loaded_quality_window_respects_size(fake_store) -> None:
    controller = AutonomyController(fake_store, AutonomySettings(quality_window_size=3))

    controller.load_state({"quality_samples": [0.1, 0.2, 0.3, 0.4, 0.5]})

    assert controller.quality_samples == pytest.approx([0.3, 0.4, 0.5])


def test_full_loop_with_real_store(
    morning_greeting: ModelSituation,
    morning_variables: ModelTemplateVariables,
) -> None:
    """Learn from the generator, then answer autonomously from the learned pattern."""
    store = ResponsePatternStore(PatternStoreSettings(seed_on_init=False), rng=random.Random(3))
    controller = AutonomyController(store, AutonomySettings())

    learned = store.extract_and_store(
        "Good morning, Aki... it's early morning.",
        morning_greeting,
        0.95,
        morning_variables,
    )
    assert learned == "pat_1"
    for _ in range(9):
        store.extract_and_store(
            "Good morning, Aki... it's early morning.",
            morning_greeting,
            0.95,
            morning_variables,
        )

    controller.set_level(EnumAutonomyLevel.AUTONOMOUS, tick=0)
    strategy = controller.decide(
        morning_greeting,
        ModelTemplateVariables(visitor_name="Sora", time_expression="dawn"),
        tick=1,
    )

    assert isinstance(strategy, ModelPatternOnlyStrategy)
    assert strategy.response == "Good morning, Sora... it's dawn."
    assert not needs_generator(strategy)
    assert augment_prompt(strategy, "hello") == ""

    controller.report(0.9, pattern_used=True, pattern_id=strategy.pattern_id, success=True)

    pattern = store.get_pattern("pat_1")
    assert pattern.use_count == 11
    assert pattern.success_count == 11
    assert isinstance(store.to_state(), ModelPatternStoreState)
