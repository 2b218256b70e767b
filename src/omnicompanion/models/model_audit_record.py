# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Audit record model for periodic quality audits."""

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.enums import EnumAutonomyLevel


class ModelAuditRecord(BaseModel):
    """Snapshot taken at each quality audit.

    Kept for external reporting only; no decision logic reads it back.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tick: int = Field(..., ge=0, description="Tick the audit ran at")
    avg_quality: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Mean of the quality window at audit time",
    )
    level: EnumAutonomyLevel = Field(..., description="Autonomy level at audit time")


__all__ = ["ModelAuditRecord"]
