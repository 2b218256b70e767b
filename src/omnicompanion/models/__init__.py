# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""OmniCompanion data models.

Frozen value models for situations, variables, matches and strategies; the
mutable ModelResponsePattern owned by the pattern store; persisted state
documents; and the pydantic-settings configuration classes.
"""

from omnicompanion.models.model_audit_record import ModelAuditRecord
from omnicompanion.models.model_autonomy_metrics import ModelAutonomyMetrics
from omnicompanion.models.model_autonomy_settings import AutonomySettings
from omnicompanion.models.model_autonomy_state import ModelAutonomyState
from omnicompanion.models.model_level_change_event import (
    LevelChangeDirection,
    ModelLevelChangeEvent,
)
from omnicompanion.models.model_pattern_match import ModelPatternMatch
from omnicompanion.models.model_pattern_store_settings import PatternStoreSettings
from omnicompanion.models.model_pattern_store_state import ModelPatternStoreState
from omnicompanion.models.model_pattern_store_stats import (
    ModelPatternStoreStats,
    ModelTopPatternSummary,
)
from omnicompanion.models.model_response_pattern import ModelResponsePattern
from omnicompanion.models.model_response_strategy import (
    RESPONSE_STRATEGY_ADAPTER,
    ModelGeneratorOnlyStrategy,
    ModelGeneratorWithHintStrategy,
    ModelPatternDraftRefineStrategy,
    ModelPatternOnlyStrategy,
    ModelPatternWithAuditStrategy,
    ResponseStrategy,
)
from omnicompanion.models.model_situation import SITUATION_DIMENSIONS, ModelSituation
from omnicompanion.models.model_template_variables import (
    PLACEHOLDER_FIELDS,
    SOFT_VARIABLE_DEFAULTS,
    ModelTemplateVariables,
)
from omnicompanion.models.model_transition_condition import ModelTransitionCondition

__all__ = [
    "PLACEHOLDER_FIELDS",
    "RESPONSE_STRATEGY_ADAPTER",
    "SITUATION_DIMENSIONS",
    "SOFT_VARIABLE_DEFAULTS",
    "AutonomySettings",
    "LevelChangeDirection",
    "ModelAuditRecord",
    "ModelAutonomyMetrics",
    "ModelAutonomyState",
    "ModelGeneratorOnlyStrategy",
    "ModelGeneratorWithHintStrategy",
    "ModelLevelChangeEvent",
    "ModelPatternDraftRefineStrategy",
    "ModelPatternMatch",
    "ModelPatternOnlyStrategy",
    "ModelPatternStoreState",
    "ModelPatternStoreStats",
    "ModelPatternWithAuditStrategy",
    "ModelResponsePattern",
    "ModelSituation",
    "ModelTemplateVariables",
    "ModelTopPatternSummary",
    "ModelTransitionCondition",
    "PatternStoreSettings",
    "ResponseStrategy",
]
