# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Transition condition model for autonomy promotion."""

from pydantic import BaseModel, ConfigDict, Field


class ModelTransitionCondition(BaseModel):
    """Gates that must all hold before promoting INTO a level.

    Every non-minimal autonomy level owns one condition. The controller only
    ever checks the condition of the level directly above the current one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_coverage: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Minimum pattern store coverage",
    )
    min_avg_satisfaction: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Minimum mean avg_satisfaction across all patterns",
    )
    min_pattern_count: int = Field(
        ...,
        ge=0,
        description="Minimum number of stored patterns",
    )
    min_bypass_success_rate: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Minimum bypass_successes / bypass_attempts",
    )
    min_ticks_at_previous_level: int = Field(
        ...,
        ge=0,
        description="Minimum ticks spent at the level below",
    )


__all__ = ["ModelTransitionCondition"]
