# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern store statistics models."""

from pydantic import BaseModel, ConfigDict, Field


class ModelTopPatternSummary(BaseModel):
    """Short summary of a highly used, well-rated pattern."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_id: str
    template: str = Field(..., description="Template truncated for display")
    satisfaction: float = Field(..., ge=0.0, le=1.0)
    uses: int = Field(..., ge=0)


class ModelPatternStoreStats(BaseModel):
    """Aggregate statistics over the pattern store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_patterns: int = Field(..., ge=0)
    seed_patterns: int = Field(..., ge=0)
    learned_patterns: int = Field(..., ge=0)
    avg_satisfaction: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Mean avg_satisfaction over all patterns (0.0 when empty)",
    )
    top_patterns: list[ModelTopPatternSummary] = Field(default_factory=list)


__all__ = ["ModelPatternStoreStats", "ModelTopPatternSummary"]
