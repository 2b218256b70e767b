# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Autonomy metrics snapshot model."""

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.enums import EnumAutonomyLevel


class ModelAutonomyMetrics(BaseModel):
    """Point-in-time view of the controller for dashboards and logs.

    Attributes:
        level: Current autonomy level.
        coverage: Pattern store coverage.
        confidence: Mean avg_satisfaction across stored patterns.
        generator_calls: Strategies that invoked the generator.
        pattern_calls: Strategies that used a pattern.
        bypass_count: Replies produced without the generator.
        avg_quality: Mean of the quality window (0.5 when empty).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: EnumAutonomyLevel
    coverage: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    generator_calls: int = Field(..., ge=0)
    pattern_calls: int = Field(..., ge=0)
    bypass_count: int = Field(..., ge=0)
    avg_quality: float = Field(..., ge=0.0, le=1.0)


__all__ = ["ModelAutonomyMetrics"]
