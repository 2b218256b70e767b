# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Response pattern store.

Owns the collection of learned and seeded response patterns and answers
best-match queries for the autonomy controller. All scoring is delegated to
the pure handlers; this module only holds state and applies mutations.

Mutation Paths:
    - find_best_match: use_count += 1, last_used = tick (selected pattern only)
    - feedback: success_count += 1 (never past use_count), EMA on satisfaction
    - extract_and_store: insert a LEARNED pattern, or reinforce a duplicate
    - cull_low_quality / size cap: delete LEARNED patterns with enough uses

Seed patterns are never deleted. Patterns with fewer than
``min_uses_before_culling`` uses are never deleted either: they have not had
a fair trial yet.

Thread Safety:
    Not thread-safe. Hosts running concurrently must serialize access.

Usage:
    store = ResponsePatternStore()
    match = store.find_best_match(situation, variables, tick=42)
    if match is not None:
        reply = match.expanded_text
"""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Iterator, Mapping

from pydantic import ValidationError

from omnicompanion.constants import (
    COVERAGE_DIMENSION_WEIGHTS,
    COVERAGE_MIN_SATISFACTION,
    SATISFACTION_EMA_RETAIN,
    STATS_TEMPLATE_PREVIEW_LENGTH,
    TOP_PATTERNS_IN_STATS,
)
from omnicompanion.enums import EnumPatternOrigin
from omnicompanion.handlers import (
    PatternStoreValidationError,
    blend_match_score,
    create_template,
    expand_template,
    pattern_reliability,
    pattern_value,
    score_situation,
    situation_overlap,
    template_similarity,
)
from omnicompanion.models import (
    ModelPatternMatch,
    ModelPatternStoreState,
    ModelPatternStoreStats,
    ModelResponsePattern,
    ModelSituation,
    ModelTemplateVariables,
    ModelTopPatternSummary,
    PatternStoreSettings,
)
from omnicompanion.pattern_store.seed_catalog import SEED_PATTERNS

logger = logging.getLogger(__name__)

_PATTERN_ID_PREFIX = "pat_"


class ResponsePatternStore:
    """In-memory store of response patterns with matching and learning.

    Args:
        settings: Store configuration. Read from the environment when omitted.
        rng: Random source for the weighted top-N draw. Inject a seeded
            ``random.Random`` for reproducible selection.
    """

    def __init__(
        self,
        settings: PatternStoreSettings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings if settings is not None else PatternStoreSettings()
        self._rng = rng if rng is not None else random.Random()
        self._patterns: dict[str, ModelResponsePattern] = {}
        self._next_id = 1
        self._recently_used: deque[str] = deque(maxlen=self._settings.recently_used_limit)

        if self._settings.seed_on_init:
            self._load_seed_patterns()

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def settings(self) -> PatternStoreSettings:
        return self._settings

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._patterns

    @property
    def pattern_count(self) -> int:
        return len(self._patterns)

    def get_pattern(self, pattern_id: str) -> ModelResponsePattern | None:
        """Return a copy of a stored pattern, or None if it does not exist."""
        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            return None
        return pattern.model_copy(deep=True)

    def iter_patterns(self) -> Iterator[ModelResponsePattern]:
        """Yield copies of all stored patterns in insertion order."""
        for pattern in list(self._patterns.values()):
            yield pattern.model_copy(deep=True)

    @property
    def recently_used(self) -> list[str]:
        """Recently matched pattern ids, oldest first."""
        return list(self._recently_used)

    # =========================================================================
    # Matching
    # =========================================================================

    def find_best_match(
        self,
        situation: ModelSituation,
        variables: ModelTemplateVariables,
        tick: int,
        *,
        correlation_id: str | None = None,
    ) -> ModelPatternMatch | None:
        """Select a pattern for the current situation.

        Scores every pattern not in the recently-used ring, drops candidates
        below ``min_match_score`` or whose template cannot be expanded, then
        draws one of the top ``top_candidates`` with probability proportional
        to its final score. The selected pattern's use_count and last_used
        are updated and its id enters the recently-used ring.

        Args:
            situation: Situation of the incoming request.
            variables: Template variables for this request.
            tick: Current logical tick.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            The selected match, or None when no pattern is usable.
        """
        candidates: list[ModelPatternMatch] = []
        recently_used = set(self._recently_used)

        for pattern in self._patterns.values():
            if pattern.pattern_id in recently_used:
                continue

            match_score = score_situation(pattern.situation, situation)
            if match_score < self._settings.min_match_score:
                continue

            expanded = expand_template(pattern.template, variables)
            if expanded is None:
                logger.debug(
                    "Skipping pattern_id=%s: required template variables missing",
                    pattern.pattern_id,
                    extra={"correlation_id": correlation_id},
                )
                continue

            reliability = pattern_reliability(pattern)
            candidates.append(
                ModelPatternMatch(
                    pattern_id=pattern.pattern_id,
                    score=blend_match_score(match_score, reliability),
                    match_score=match_score,
                    reliability=reliability,
                    expanded_text=expanded,
                )
            )

        if not candidates:
            logger.debug(
                "No usable pattern among %d stored patterns",
                len(self._patterns),
                extra={"correlation_id": correlation_id},
            )
            return None

        candidates.sort(key=lambda m: m.score, reverse=True)
        selected = self._weighted_draw(candidates[: self._settings.top_candidates])
        self._record_usage(selected.pattern_id, tick)

        logger.debug(
            "Selected pattern_id=%s score=%.3f from %d candidates",
            selected.pattern_id,
            selected.score,
            len(candidates),
            extra={"correlation_id": correlation_id},
        )
        return selected

    def _weighted_draw(self, top: list[ModelPatternMatch]) -> ModelPatternMatch:
        total = sum(m.score for m in top)
        if total <= 0:
            return top[0]
        return self._rng.choices(top, weights=[m.score for m in top], k=1)[0]

    def _record_usage(self, pattern_id: str, tick: int) -> None:
        pattern = self._patterns.get(pattern_id)
        if pattern is not None:
            pattern.use_count += 1
            pattern.last_used = max(0, tick)
        self._recently_used.append(pattern_id)

    # =========================================================================
    # Learning
    # =========================================================================

    def extract_and_store(
        self,
        response_text: str,
        situation: ModelSituation,
        satisfaction: float,
        variables: ModelTemplateVariables,
        *,
        correlation_id: str | None = None,
    ) -> str | None:
        """Learn a pattern from a well-received generator reply.

        Replies below ``min_satisfaction_for_extraction`` are ignored. The
        reply is turned into a template by replacing bound variable values
        with placeholders. If an existing pattern has a similar template
        (similarity > duplicate_threshold) AND an overlapping situation
        (overlap > duplicate_situation_overlap), that pattern is reinforced
        instead of inserting a new one.

        Args:
            response_text: Reply produced by the generator.
            situation: Situation the reply was produced for.
            satisfaction: Observed satisfaction in [0.0, 1.0].
            variables: Variables in effect for the reply.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            Id of the newly inserted pattern, or None when nothing was
            inserted (below floor, rejected template, or duplicate).

        Raises:
            PatternStoreValidationError: If satisfaction is outside [0, 1].
        """
        _validate_unit_interval("satisfaction", satisfaction)

        if satisfaction < self._settings.min_satisfaction_for_extraction:
            return None

        template = create_template(response_text, variables)
        if template is None or len(template) > self._settings.max_template_length:
            logger.debug(
                "Rejected extraction candidate (unparameterizable or too long)",
                extra={"correlation_id": correlation_id},
            )
            return None

        duplicate = self._find_duplicate(template, situation)
        if duplicate is not None:
            self._reinforce(duplicate, satisfaction)
            logger.debug(
                "Reinforced duplicate pattern_id=%s",
                duplicate.pattern_id,
                extra={"correlation_id": correlation_id},
            )
            return None

        pattern = ModelResponsePattern(
            pattern_id=self._allocate_id(),
            situation=situation,
            template=template,
            success_count=1,
            use_count=1,
            avg_satisfaction=satisfaction,
            last_used=0,
            origin=EnumPatternOrigin.LEARNED,
            emotion_tags=sorted(situation.emotions)[:3],
        )
        self._patterns[pattern.pattern_id] = pattern
        logger.info(
            "Learned pattern_id=%s (store size %d)",
            pattern.pattern_id,
            len(self._patterns),
            extra={"correlation_id": correlation_id},
        )

        self._enforce_capacity(correlation_id=correlation_id)

        if pattern.pattern_id not in self._patterns:
            return None
        return pattern.pattern_id

    def _find_duplicate(
        self,
        template: str,
        situation: ModelSituation,
    ) -> ModelResponsePattern | None:
        """Return the most similar existing pattern that counts as a duplicate."""
        best: ModelResponsePattern | None = None
        best_similarity = 0.0

        for existing in self._patterns.values():
            similarity = template_similarity(template, existing.template)
            if similarity <= self._settings.duplicate_threshold:
                continue
            if situation_overlap(situation, existing.situation) <= self._settings.duplicate_situation_overlap:
                continue
            if best is None or similarity > best_similarity:
                best = existing
                best_similarity = similarity

        return best

    @staticmethod
    def _reinforce(pattern: ModelResponsePattern, satisfaction: float) -> None:
        pattern.use_count += 1
        pattern.success_count += 1
        # Cumulative mean over all uses, including the new one.
        pattern.avg_satisfaction = min(
            1.0,
            (pattern.avg_satisfaction * (pattern.use_count - 1) + satisfaction) / pattern.use_count,
        )

    # =========================================================================
    # Feedback
    # =========================================================================

    def feedback(self, pattern_id: str, success: bool, satisfaction: float) -> None:
        """Apply the observed outcome of a pattern use.

        Unknown ids (e.g. a pattern evicted since it was matched) are ignored.

        Raises:
            PatternStoreValidationError: If satisfaction is outside [0, 1].
        """
        _validate_unit_interval("satisfaction", satisfaction)

        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            logger.debug("Feedback for unknown pattern_id=%s ignored", pattern_id)
            return

        if success and pattern.success_count < pattern.use_count:
            pattern.success_count += 1

        pattern.avg_satisfaction = min(
            1.0,
            pattern.avg_satisfaction * SATISFACTION_EMA_RETAIN
            + satisfaction * (1.0 - SATISFACTION_EMA_RETAIN),
        )

        assert pattern.success_count <= pattern.use_count

    # =========================================================================
    # Eviction
    # =========================================================================

    def cull_low_quality(self) -> int:
        """Remove learned patterns that have proven to perform poorly.

        Only LEARNED patterns with at least ``min_uses_before_culling`` uses
        are considered. A pattern is removed if its avg_satisfaction is below
        ``min_satisfaction_for_keep`` or its success rate is below
        ``min_success_rate_for_keep``.

        Returns:
            Number of patterns removed.
        """
        to_remove = [
            pattern.pattern_id
            for pattern in self._patterns.values()
            if self._is_evictable(pattern)
            and (
                pattern.avg_satisfaction < self._settings.min_satisfaction_for_keep
                or pattern.success_rate < self._settings.min_success_rate_for_keep
            )
        ]

        for pattern_id in to_remove:
            del self._patterns[pattern_id]

        if to_remove:
            logger.info(
                "Culled %d low-quality patterns (store size %d)",
                len(to_remove),
                len(self._patterns),
            )
        return len(to_remove)

    def _enforce_capacity(self, *, correlation_id: str | None = None) -> None:
        """Evict the lowest-value evictable patterns until within max_patterns."""
        excess = len(self._patterns) - self._settings.max_patterns
        if excess <= 0:
            return

        ranked = sorted(
            (p for p in self._patterns.values() if self._is_evictable(p)),
            key=pattern_value,
        )
        evicted = [p.pattern_id for p in ranked[:excess]]
        for pattern_id in evicted:
            del self._patterns[pattern_id]

        logger.info(
            "Evicted %d patterns to enforce cap of %d: %s",
            len(evicted),
            self._settings.max_patterns,
            evicted,
            extra={"correlation_id": correlation_id},
        )
        if len(self._patterns) > self._settings.max_patterns:
            logger.warning(
                "Store size %d exceeds cap %d: not enough evictable patterns",
                len(self._patterns),
                self._settings.max_patterns,
                extra={"correlation_id": correlation_id},
            )

    def _is_evictable(self, pattern: ModelResponsePattern) -> bool:
        return (
            pattern.origin != EnumPatternOrigin.SEED
            and pattern.use_count >= self._settings.min_uses_before_culling
        )

    # =========================================================================
    # Statistics
    # =========================================================================

    def coverage(self) -> float:
        """Fraction of the known intent/emotion/depth vocabularies covered.

        Only patterns with avg_satisfaction >= 0.5 count. The per-dimension
        rates are capped at 1.0 and combined as
        0.4 * intents + 0.3 * emotions + 0.3 * depths.
        """
        intents: set[str] = set()
        emotions: set[str] = set()
        depths: set[str] = set()

        for pattern in self._patterns.values():
            if pattern.avg_satisfaction < COVERAGE_MIN_SATISFACTION:
                continue
            intents.update(pattern.situation.intents)
            emotions.update(pattern.situation.emotions)
            depths.update(pattern.situation.depths)

        intent_rate = min(1.0, len(intents) / self._settings.coverage_intent_vocabulary_size)
        emotion_rate = min(1.0, len(emotions) / self._settings.coverage_emotion_vocabulary_size)
        depth_rate = min(1.0, len(depths) / self._settings.coverage_depth_vocabulary_size)

        coverage = (
            intent_rate * COVERAGE_DIMENSION_WEIGHTS["intents"]
            + emotion_rate * COVERAGE_DIMENSION_WEIGHTS["emotions"]
            + depth_rate * COVERAGE_DIMENSION_WEIGHTS["depths"]
        )
        return min(1.0, coverage)

    def get_stats(self) -> ModelPatternStoreStats:
        """Aggregate statistics over all stored patterns."""
        patterns = list(self._patterns.values())
        seed_count = sum(1 for p in patterns if p.origin == EnumPatternOrigin.SEED)
        avg_satisfaction = (
            sum(p.avg_satisfaction for p in patterns) / len(patterns) if patterns else 0.0
        )

        top = sorted(patterns, key=lambda p: p.avg_satisfaction * p.use_count, reverse=True)
        return ModelPatternStoreStats(
            total_patterns=len(patterns),
            seed_patterns=seed_count,
            learned_patterns=len(patterns) - seed_count,
            avg_satisfaction=min(1.0, avg_satisfaction),
            top_patterns=[
                ModelTopPatternSummary(
                    pattern_id=p.pattern_id,
                    template=p.template[:STATS_TEMPLATE_PREVIEW_LENGTH],
                    satisfaction=p.avg_satisfaction,
                    uses=p.use_count,
                )
                for p in top[:TOP_PATTERNS_IN_STATS]
            ],
        )

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_state(self) -> ModelPatternStoreState:
        """Snapshot the store as a persistable document."""
        return ModelPatternStoreState(
            patterns=[p.model_copy(deep=True) for p in self._patterns.values()],
            next_id=self._next_id,
            recently_used=list(self._recently_used),
        )

    def to_dict(self) -> dict[str, object]:
        """Snapshot the store as JSON-compatible data."""
        return self.to_state().model_dump(mode="json")

    def load_state(
        self,
        data: ModelPatternStoreState | Mapping[str, object] | None,
    ) -> None:
        """Replace store contents from a persisted document.

        A None document leaves the store unchanged. Fields absent from a
        partial document, or of the wrong type, keep their current values.
        Individual patterns that fail validation are skipped with a warning
        rather than failing the whole load.
        """
        if data is None:
            return

        if isinstance(data, ModelPatternStoreState):
            present = set(ModelPatternStoreState.model_fields)
            state = data
        else:
            state, present = _coerce_store_state(data)

        if "patterns" in present:
            self._patterns = {p.pattern_id: p.model_copy(deep=True) for p in state.patterns}
        if "next_id" in present:
            self._next_id = state.next_id
        self._next_id = max(self._next_id, _max_numeric_id(self._patterns) + 1)
        if "recently_used" in present:
            self._recently_used = deque(
                state.recently_used,
                maxlen=self._settings.recently_used_limit,
            )

    @classmethod
    def from_state(
        cls,
        data: ModelPatternStoreState | Mapping[str, object] | None,
        settings: PatternStoreSettings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> ResponsePatternStore:
        """Build a store from a persisted document (None -> fresh store)."""
        store = cls(settings, rng=rng)
        store.load_state(data)
        return store

    # =========================================================================
    # Internals
    # =========================================================================

    def _allocate_id(self) -> str:
        pattern_id = f"{_PATTERN_ID_PREFIX}{self._next_id}"
        self._next_id += 1
        return pattern_id

    def _load_seed_patterns(self) -> None:
        for seed in SEED_PATTERNS:
            pattern = ModelResponsePattern(
                pattern_id=self._allocate_id(),
                situation=ModelSituation.model_validate(seed["situation"]),
                template=seed["template"],
                success_count=seed["success_count"],
                use_count=seed["use_count"],
                avg_satisfaction=seed["avg_satisfaction"],
                last_used=0,
                origin=EnumPatternOrigin.SEED,
                emotion_tags=list(seed["emotion_tags"]),
            )
            self._patterns[pattern.pattern_id] = pattern


def _validate_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise PatternStoreValidationError(f"{name} must be in [0, 1], got {value}")


def _max_numeric_id(patterns: Mapping[str, ModelResponsePattern]) -> int:
    highest = 0
    for pattern_id in patterns:
        suffix = pattern_id.removeprefix(_PATTERN_ID_PREFIX)
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


def _coerce_store_state(
    data: Mapping[str, object],
) -> tuple[ModelPatternStoreState, set[str]]:
    """Validate a raw document, dropping only the parts that are malformed.

    Returns:
        The recovered state and the names of the fields it should apply.
        A field whose value has the wrong type is left out so the store
        keeps its current value for it.
    """
    present = {key for key in data if key in ModelPatternStoreState.model_fields}
    try:
        return ModelPatternStoreState.model_validate(dict(data)), present
    except ValidationError:
        logger.warning("Pattern store document is partially malformed; recovering")

    patterns: list[ModelResponsePattern] = []
    raw_patterns = data.get("patterns")
    if not isinstance(raw_patterns, list):
        present.discard("patterns")
    else:
        for raw in raw_patterns:
            try:
                patterns.append(ModelResponsePattern.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping malformed persisted pattern: %s", e.error_count())

    next_id = 1
    raw_next_id = data.get("next_id")
    if isinstance(raw_next_id, int) and not isinstance(raw_next_id, bool) and raw_next_id >= 1:
        next_id = raw_next_id
    else:
        present.discard("next_id")

    recently_used: list[str] = []
    raw_recent = data.get("recently_used")
    if isinstance(raw_recent, list):
        recently_used = [r for r in raw_recent if isinstance(r, str)]
    else:
        present.discard("recently_used")

    state = ModelPatternStoreState(
        patterns=patterns,
        next_id=next_id,
        recently_used=recently_used,
    )
    return state, present


__all__ = ["ResponsePatternStore"]
