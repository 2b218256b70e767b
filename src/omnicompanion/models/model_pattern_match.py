# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelPatternMatch - result of a best-match query against the pattern store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelPatternMatch(BaseModel):
    """A selected pattern with its scores and expanded reply text.

    Attributes:
        pattern_id: Id of the selected pattern.
        score: Final blended score (0.7 * match_score + 0.3 * reliability).
            The autonomy controller compares this value with its thresholds.
        match_score: Raw situation similarity from the matcher.
        reliability: Reliability term derived from usage statistics.
        expanded_text: Template with all variables substituted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_id: str = Field(..., min_length=1, description="Selected pattern id")
    score: float = Field(..., ge=0.0, le=1.0, description="Final blended score")
    match_score: float = Field(..., ge=0.0, le=1.0, description="Raw situation score")
    reliability: float = Field(..., ge=0.0, le=1.0, description="Usage-based reliability")
    expanded_text: str = Field(..., min_length=1, description="Expanded reply text")


__all__ = ["ModelPatternMatch"]
