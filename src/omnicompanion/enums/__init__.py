# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
OmniCompanion Enums Package.

Consolidated enums for the omnicompanion system.

    from omnicompanion.enums import (
        EnumAutonomyLevel,
        EnumPatternOrigin,
        EnumStrategyType,
    )

Exports:
    - EnumAutonomyLevel: Ordered autonomy scale (FULL_GENERATOR .. AUTONOMOUS)
    - EnumPatternOrigin: Pattern provenance (SEED, LEARNED)
    - EnumStrategyType: Response strategy discriminator
"""

from omnicompanion.enums.enum_autonomy_level import EnumAutonomyLevel
from omnicompanion.enums.enum_pattern_origin import EnumPatternOrigin
from omnicompanion.enums.enum_strategy_type import EnumStrategyType

__all__ = [
    "EnumAutonomyLevel",
    "EnumPatternOrigin",
    "EnumStrategyType",
]
