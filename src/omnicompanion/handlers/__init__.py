# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Pure handler functions for matching, templating and autonomy gates.

Handlers are side-effect free; the stateful ResponsePatternStore and
AutonomyController delegate all scoring and decision math to them.
"""

from omnicompanion.handlers.exceptions import (
    AutonomyStateError,
    PatternStoreValidationError,
)
from omnicompanion.handlers.handler_level_transitions import (
    TRANSITION_CONDITIONS,
    PromotionGate,
    detect_quality_degradation,
    failed_promotion_gates,
)
from omnicompanion.handlers.handler_pattern_scoring import (
    blend_match_score,
    pattern_reliability,
    pattern_value,
)
from omnicompanion.handlers.handler_situation_matching import (
    emotion_group_similarity,
    keyword_match_fraction,
    score_situation,
    situation_overlap,
)
from omnicompanion.handlers.handler_strategy_prompt import (
    augment_prompt,
    needs_generator,
)
from omnicompanion.handlers.handler_template_expansion import (
    PLACEHOLDER_PATTERN,
    expand_template,
    find_placeholders,
)
from omnicompanion.handlers.handler_template_extraction import (
    create_template,
    template_similarity,
)

__all__ = [
    "PLACEHOLDER_PATTERN",
    "TRANSITION_CONDITIONS",
    "AutonomyStateError",
    "PatternStoreValidationError",
    "PromotionGate",
    "augment_prompt",
    "blend_match_score",
    "create_template",
    "detect_quality_degradation",
    "emotion_group_similarity",
    "expand_template",
    "failed_promotion_gates",
    "find_placeholders",
    "keyword_match_fraction",
    "needs_generator",
    "pattern_reliability",
    "pattern_value",
    "score_situation",
    "situation_overlap",
    "template_similarity",
]
