# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Persisted document for the autonomy controller."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.enums import EnumAutonomyLevel
from omnicompanion.models.model_audit_record import ModelAuditRecord


class ModelAutonomyState(BaseModel):
    """Serializable snapshot of an AutonomyController.

    Every field has a default so that a missing or partial document
    validates to the controller's initial state.
    """

    model_config = ConfigDict(extra="ignore")

    current_level: EnumAutonomyLevel = Field(default=EnumAutonomyLevel.FULL_GENERATOR)
    level_entered_tick: int = Field(default=0, ge=0)
    generator_calls: int = Field(default=0, ge=0)
    pattern_calls: int = Field(default=0, ge=0)
    bypass_count: int = Field(default=0, ge=0)
    bypass_attempts: int = Field(default=0, ge=0)
    bypass_successes: int = Field(default=0, ge=0)
    quality_samples: list[Annotated[float, Field(ge=0.0, le=1.0)]] = Field(
        default_factory=list,
        description="Quality window, oldest first",
    )
    last_audit_tick: int = Field(default=0, ge=0)
    audit_history: list[ModelAuditRecord] = Field(default_factory=list)


__all__ = ["ModelAutonomyState"]
