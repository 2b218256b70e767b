# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Autonomy controller: graduated trust in learned patterns.

Decides, per request, how much of the reply may come from the pattern store
instead of the external generator, and periodically moves the autonomy level
up or down one step based on accumulated quality.

Strategy Table (decide):
    Level              Threshold   Pattern strategy            Otherwise
    FULL_GENERATOR     -           (never)                     generator only
    GENERATOR_PRIMARY  > 0.6       generator with hint         generator only
    HYBRID             > 0.5       pattern draft, refine       generator only
    PATTERN_PRIMARY    > 0.5       pattern with audit          generator only
    AUTONOMOUS         > 0.6       pattern only (bypass)       generator only

    Unknown situations always fall back to the generator, even when
    AUTONOMOUS: the controller fails closed.

Counters:
    - generator_calls: every strategy that invokes the generator (the
      audit strategy included)
    - pattern_calls: every strategy that uses a pattern
    - bypass_attempts: strategies whose reply text comes from a pattern
      (PATTERN_WITH_AUDIT and PATTERN_ONLY)
    - bypass_count: replies produced with no generator call (PATTERN_ONLY)
    - bypass_successes: reports that explicitly flag a pattern use as success

Level Evaluation (evaluate):
    1. Quality audit every ``audit_interval`` ticks: record an audit entry and
       ask the store to cull low-quality patterns.
    2. Demotion check (quality drop or absolute floor). A demotion clears the
       quality window so stale samples cannot trigger an immediate
       re-promotion or a second demotion.
    3. Otherwise, promotion check against the NEXT level's transition
       condition only.
    At most one step per call, in either direction.

Thread Safety:
    Not thread-safe. decide() must precede the matching report(), and
    report() must be called at most once per request.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from typing import Final

from pydantic import ValidationError

from omnicompanion.constants import DEFAULT_SUCCESS_QUALITY_THRESHOLD, NEUTRAL_QUALITY
from omnicompanion.enums import EnumAutonomyLevel
from omnicompanion.handlers import (
    TRANSITION_CONDITIONS,
    AutonomyStateError,
    detect_quality_degradation,
    failed_promotion_gates,
)
from omnicompanion.models import (
    AutonomySettings,
    ModelAuditRecord,
    ModelAutonomyMetrics,
    ModelAutonomyState,
    ModelGeneratorOnlyStrategy,
    ModelGeneratorWithHintStrategy,
    ModelLevelChangeEvent,
    ModelPatternDraftRefineStrategy,
    ModelPatternMatch,
    ModelPatternOnlyStrategy,
    ModelPatternWithAuditStrategy,
    ModelSituation,
    ModelTemplateVariables,
    ModelTransitionCondition,
    ResponseStrategy,
)
from omnicompanion.protocols import ProtocolPatternStore

logger = logging.getLogger(__name__)

STRATEGY_SCORE_THRESHOLDS: Final[dict[EnumAutonomyLevel, float]] = {
    EnumAutonomyLevel.GENERATOR_PRIMARY: 0.6,
    EnumAutonomyLevel.HYBRID: 0.5,
    EnumAutonomyLevel.PATTERN_PRIMARY: 0.5,
    EnumAutonomyLevel.AUTONOMOUS: 0.6,
}
"""A match must score strictly above this to be used at each level."""


class AutonomyController:
    """Owns the autonomy level and turns pattern matches into strategies.

    Args:
        pattern_store: Store queried for matches and fed quality feedback.
        settings: Controller configuration. Read from the environment when
            omitted.
        transition_conditions: Promotion conditions keyed by target level.
            Defaults to TRANSITION_CONDITIONS.
    """

    def __init__(
        self,
        pattern_store: ProtocolPatternStore,
        settings: AutonomySettings | None = None,
        *,
        transition_conditions: Mapping[EnumAutonomyLevel, ModelTransitionCondition] | None = None,
    ) -> None:
        self._store = pattern_store
        self._settings = settings if settings is not None else AutonomySettings()
        self._conditions = dict(
            transition_conditions if transition_conditions is not None else TRANSITION_CONDITIONS
        )

        self._level = EnumAutonomyLevel.FULL_GENERATOR
        self._level_entered_tick = 0
        self._generator_calls = 0
        self._pattern_calls = 0
        self._bypass_count = 0
        self._bypass_attempts = 0
        self._bypass_successes = 0
        self._quality_samples: deque[float] = deque(maxlen=self._settings.quality_window_size)
        self._last_audit_tick = 0
        self._audit_history: deque[ModelAuditRecord] = deque(
            maxlen=self._settings.audit_history_limit
        )

    # =========================================================================
    # Strategy
    # =========================================================================

    def decide(
        self,
        situation: ModelSituation,
        variables: ModelTemplateVariables,
        tick: int,
        *,
        correlation_id: str | None = None,
    ) -> ResponseStrategy:
        """Choose how the host should produce the next reply.

        The pattern store is always queried first, so a selected pattern is
        marked as used even when the current level ignores it.

        Args:
            situation: Situation of the incoming request.
            variables: Template variables for this request.
            tick: Current logical tick.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            One of the five ResponseStrategy variants.
        """
        candidate = self._store.find_best_match(
            situation, variables, tick, correlation_id=correlation_id
        )
        strategy = self._strategy_for(candidate)

        logger.debug(
            "Strategy %s at level %s (match score %s)",
            strategy.strategy_type.value,
            self._level.value,
            f"{candidate.score:.3f}" if candidate is not None else "none",
            extra={"correlation_id": correlation_id},
        )
        return strategy

    def _strategy_for(self, candidate: ModelPatternMatch | None) -> ResponseStrategy:
        threshold = STRATEGY_SCORE_THRESHOLDS.get(self._level)
        usable = candidate is not None and threshold is not None and candidate.score > threshold

        if candidate is None or not usable:
            self._generator_calls += 1
            return ModelGeneratorOnlyStrategy()

        match self._level:
            case EnumAutonomyLevel.GENERATOR_PRIMARY:
                self._generator_calls += 1
                self._pattern_calls += 1
                return ModelGeneratorWithHintStrategy(
                    pattern_id=candidate.pattern_id,
                    template=candidate.expanded_text,
                )
            case EnumAutonomyLevel.HYBRID:
                self._generator_calls += 1
                self._pattern_calls += 1
                return ModelPatternDraftRefineStrategy(
                    pattern_id=candidate.pattern_id,
                    draft=candidate.expanded_text,
                )
            case EnumAutonomyLevel.PATTERN_PRIMARY:
                self._generator_calls += 1
                self._pattern_calls += 1
                self._bypass_attempts += 1
                return ModelPatternWithAuditStrategy(
                    pattern_id=candidate.pattern_id,
                    response=candidate.expanded_text,
                )
            case EnumAutonomyLevel.AUTONOMOUS:
                self._pattern_calls += 1
                self._bypass_count += 1
                self._bypass_attempts += 1
                return ModelPatternOnlyStrategy(
                    pattern_id=candidate.pattern_id,
                    response=candidate.expanded_text,
                )
            case _:
                self._generator_calls += 1
                return ModelGeneratorOnlyStrategy()

    # =========================================================================
    # Feedback
    # =========================================================================

    def report(
        self,
        quality: float,
        pattern_used: bool,
        pattern_id: str | None = None,
        success: bool | None = None,
    ) -> None:
        """Record the observed quality of a reply.

        Args:
            quality: Observed quality in [0.0, 1.0]. Out-of-range values are
                clamped with a warning rather than rejected.
            pattern_used: Whether the reply used a pattern.
            pattern_id: Id of the pattern used, from the strategy.
            success: Explicit success flag. When None, the store receives
                ``quality > 0.5`` as the success signal. Only an explicit True
                counts as a bypass success.
        """
        if not 0.0 <= quality <= 1.0:
            logger.warning("Quality %r outside [0, 1]; clamping", quality)
            quality = min(1.0, max(0.0, quality))

        self._quality_samples.append(quality)

        if pattern_used and pattern_id:
            resolved = success if success is not None else quality > DEFAULT_SUCCESS_QUALITY_THRESHOLD
            self._store.feedback(pattern_id, resolved, quality)
            if success:
                self._bypass_successes += 1

    # =========================================================================
    # Level evaluation
    # =========================================================================

    def evaluate(
        self,
        tick: int,
        *,
        correlation_id: str | None = None,
    ) -> ModelLevelChangeEvent | None:
        """Audit if due, then demote or promote by at most one level.

        Args:
            tick: Current logical tick.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            The level change, or None when the level stayed the same.
        """
        if tick - self._last_audit_tick >= self._settings.audit_interval:
            self._perform_audit(tick, correlation_id=correlation_id)

        previous = self._level

        if self._settings.enable_auto_demotion:
            reason = self._demotion_reason()
            lower = self._level.previous_level()
            if reason is not None and lower is not None:
                self._level = lower
                self._level_entered_tick = tick
                self._quality_samples.clear()
                logger.info(
                    "Autonomy demoted %s -> %s: %s",
                    previous.value,
                    lower.value,
                    reason,
                    extra={"correlation_id": correlation_id},
                )
                return ModelLevelChangeEvent(
                    tick=max(0, tick),
                    previous_level=previous,
                    current_level=lower,
                    direction="demoted",
                    reason=reason,
                )

        if self._settings.enable_auto_promotion:
            higher = self._level.next_level()
            if higher is not None and self._can_promote_to(higher, tick, correlation_id):
                self._level = higher
                self._level_entered_tick = tick
                logger.info(
                    "Autonomy promoted %s -> %s",
                    previous.value,
                    higher.value,
                    extra={"correlation_id": correlation_id},
                )
                return ModelLevelChangeEvent(
                    tick=max(0, tick),
                    previous_level=previous,
                    current_level=higher,
                    direction="promoted",
                    reason=f"transition condition for {higher.value} satisfied",
                )

        return None

    def _demotion_reason(self) -> str | None:
        if self._level.previous_level() is None:
            return None
        return detect_quality_degradation(
            list(self._quality_samples),
            min_samples=self._settings.min_samples_for_demotion,
            recent_window=self._settings.recent_window,
            drop_threshold=self._settings.quality_drop_threshold,
            absolute_floor=self._settings.absolute_quality_floor,
        )

    def _can_promote_to(
        self,
        target: EnumAutonomyLevel,
        tick: int,
        correlation_id: str | None,
    ) -> bool:
        condition = self._conditions.get(target)
        if condition is None:
            return False

        stats = self._store.get_stats()
        failed = failed_promotion_gates(
            condition,
            ticks_at_level=tick - self._level_entered_tick,
            coverage=self._store.coverage(),
            pattern_count=stats.total_patterns,
            avg_satisfaction=stats.avg_satisfaction,
            bypass_attempts=self._bypass_attempts,
            bypass_successes=self._bypass_successes,
        )
        if failed:
            logger.debug(
                "Promotion to %s blocked by gates: %s",
                target.value,
                ", ".join(failed),
                extra={"correlation_id": correlation_id},
            )
            return False
        return True

    def _perform_audit(self, tick: int, *, correlation_id: str | None = None) -> None:
        self._last_audit_tick = tick
        record = ModelAuditRecord(
            tick=max(0, tick),
            avg_quality=self._average_quality(),
            level=self._level,
        )
        self._audit_history.append(record)

        culled = self._store.cull_low_quality()
        logger.info(
            "Quality audit at tick %d: avg_quality=%.3f level=%s culled=%d",
            tick,
            record.avg_quality,
            record.level.value,
            culled,
            extra={"correlation_id": correlation_id},
        )

    # =========================================================================
    # Manual control
    # =========================================================================

    def reset_to_full_generator(self, tick: int) -> None:
        """Safety reset: back to FULL_GENERATOR with all counters cleared.

        The audit history is kept for reporting.
        """
        logger.warning(
            "Autonomy reset to %s from %s at tick %d",
            EnumAutonomyLevel.FULL_GENERATOR.value,
            self._level.value,
            tick,
        )
        self._level = EnumAutonomyLevel.FULL_GENERATOR
        self._level_entered_tick = tick
        self._generator_calls = 0
        self._pattern_calls = 0
        self._bypass_count = 0
        self._bypass_attempts = 0
        self._bypass_successes = 0
        self._quality_samples.clear()

    def set_level(self, level: EnumAutonomyLevel, tick: int) -> None:
        """Force a level (debugging and tests). Counters are left untouched."""
        logger.info("Autonomy level set manually to %s", level.value)
        self._level = level
        self._level_entered_tick = tick

    # =========================================================================
    # Introspection
    # =========================================================================

    def current_level(self) -> EnumAutonomyLevel:
        return self._level

    @property
    def settings(self) -> AutonomySettings:
        return self._settings

    @property
    def quality_samples(self) -> list[float]:
        """Quality window, oldest first."""
        return list(self._quality_samples)

    @property
    def audit_history(self) -> list[ModelAuditRecord]:
        return list(self._audit_history)

    def metrics(self) -> ModelAutonomyMetrics:
        """Snapshot of the controller and the store's headline figures."""
        stats = self._store.get_stats()
        return ModelAutonomyMetrics(
            level=self._level,
            coverage=self._store.coverage(),
            confidence=stats.avg_satisfaction,
            generator_calls=self._generator_calls,
            pattern_calls=self._pattern_calls,
            bypass_count=self._bypass_count,
            avg_quality=self._average_quality(),
        )

    def _average_quality(self) -> float:
        if not self._quality_samples:
            return NEUTRAL_QUALITY
        return min(1.0, sum(self._quality_samples) / len(self._quality_samples))

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_state(self) -> ModelAutonomyState:
        """Snapshot the controller as a persistable document."""
        return ModelAutonomyState(
            current_level=self._level,
            level_entered_tick=max(0, self._level_entered_tick),
            generator_calls=self._generator_calls,
            pattern_calls=self._pattern_calls,
            bypass_count=self._bypass_count,
            bypass_attempts=self._bypass_attempts,
            bypass_successes=self._bypass_successes,
            quality_samples=list(self._quality_samples),
            last_audit_tick=max(0, self._last_audit_tick),
            audit_history=list(self._audit_history),
        )

    def to_dict(self) -> dict[str, object]:
        """Snapshot the controller as JSON-compatible data."""
        return self.to_state().model_dump(mode="json")

    def load_state(self, data: ModelAutonomyState | Mapping[str, object] | None) -> None:
        """Restore controller state from a persisted document.

        Never raises for bad data: a None document leaves the controller
        unchanged, absent fields keep their current values, and malformed
        fields (e.g. an unknown level name) are replaced by their defaults
        with a warning.
        """
        if data is None:
            return

        if isinstance(data, ModelAutonomyState):
            state = data
            present = set(ModelAutonomyState.model_fields)
        else:
            state, present = _decode_autonomy_state(data)

        if "current_level" in present:
            self._level = state.current_level
        if "level_entered_tick" in present:
            self._level_entered_tick = state.level_entered_tick
        if "generator_calls" in present:
            self._generator_calls = state.generator_calls
        if "pattern_calls" in present:
            self._pattern_calls = state.pattern_calls
        if "bypass_count" in present:
            self._bypass_count = state.bypass_count
        if "bypass_attempts" in present:
            self._bypass_attempts = state.bypass_attempts
        if "bypass_successes" in present:
            self._bypass_successes = state.bypass_successes
        if "quality_samples" in present:
            self._quality_samples = deque(
                state.quality_samples, maxlen=self._settings.quality_window_size
            )
        if "last_audit_tick" in present:
            self._last_audit_tick = state.last_audit_tick
        if "audit_history" in present:
            self._audit_history = deque(
                state.audit_history, maxlen=self._settings.audit_history_limit
            )

    @classmethod
    def from_state(
        cls,
        pattern_store: ProtocolPatternStore,
        data: ModelAutonomyState | Mapping[str, object] | None,
        settings: AutonomySettings | None = None,
    ) -> AutonomyController:
        """Build a controller from a persisted document (None -> fresh)."""
        controller = cls(pattern_store, settings)
        controller.load_state(data)
        return controller


def _decode_autonomy_state(data: Mapping[str, object]) -> tuple[ModelAutonomyState, set[str]]:
    """Validate a raw document field by field, defaulting malformed fields."""
    present = {key for key in data if key in ModelAutonomyState.model_fields}
    try:
        return ModelAutonomyState.model_validate(dict(data)), present
    except ValidationError:
        pass

    valid: dict[str, object] = {}
    for name in sorted(present):
        try:
            valid[name] = _decode_field(name, data[name])
        except AutonomyStateError as e:
            logger.warning("Recovered malformed autonomy state: %s", e)
            present.discard(name)

    return ModelAutonomyState.model_validate(valid), present


def _decode_field(name: str, value: object) -> object:
    try:
        partial = ModelAutonomyState.model_validate({name: value})
    except ValidationError as e:
        raise AutonomyStateError(
            f"field {name!r} is invalid ({e.error_count()} errors); using default"
        ) from e
    return getattr(partial, name)


__all__ = ["STRATEGY_SCORE_THRESHOLDS", "AutonomyController"]
