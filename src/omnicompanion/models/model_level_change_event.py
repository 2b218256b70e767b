# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Level change event emitted by AutonomyController.evaluate()."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.enums import EnumAutonomyLevel

LevelChangeDirection = Literal["promoted", "demoted"]


class ModelLevelChangeEvent(BaseModel):
    """Describes a single one-step move of the autonomy level.

    Only produced when the level actually changed; evaluate() returns None
    otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tick: int = Field(..., ge=0, description="Tick of the evaluation")
    previous_level: EnumAutonomyLevel = Field(..., description="Level before the change")
    current_level: EnumAutonomyLevel = Field(..., description="Level after the change")
    direction: LevelChangeDirection = Field(..., description="promoted or demoted")
    reason: str = Field(..., min_length=1, description="Human-readable trigger")


__all__ = ["LevelChangeDirection", "ModelLevelChangeEvent"]
