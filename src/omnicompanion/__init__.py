# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""OmniCompanion - learned response patterns with graduated autonomy.

A companion character starts fully dependent on an external text generator.
Good replies are distilled into parameterized templates (the pattern store);
as those patterns prove reliable, the autonomy controller hands more of each
reply over to them, and falls back again when quality drops.
"""

from omnicompanion.autonomy import AutonomyController
from omnicompanion.enums import EnumAutonomyLevel, EnumPatternOrigin, EnumStrategyType
from omnicompanion.models import (
    AutonomySettings,
    ModelSituation,
    ModelTemplateVariables,
    PatternStoreSettings,
    ResponseStrategy,
)
from omnicompanion.pattern_store import ResponsePatternStore

__version__ = "0.1.0"

__all__ = [
    "AutonomyController",
    "AutonomySettings",
    "EnumAutonomyLevel",
    "EnumPatternOrigin",
    "EnumStrategyType",
    "ModelSituation",
    "ModelTemplateVariables",
    "PatternStoreSettings",
    "ResponsePatternStore",
    "__version__",
]
