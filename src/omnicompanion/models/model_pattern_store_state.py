# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Persisted document for the response pattern store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.models.model_response_pattern import ModelResponsePattern


class ModelPatternStoreState(BaseModel):
    """Serializable snapshot of a ResponsePatternStore.

    Every field has a default so that an empty document validates to a
    fresh, empty store state.
    """

    model_config = ConfigDict(extra="ignore")

    patterns: list[ModelResponsePattern] = Field(
        default_factory=list,
        description="All stored patterns in insertion order",
    )
    next_id: int = Field(default=1, ge=1, description="Next pattern id counter value")
    recently_used: list[str] = Field(
        default_factory=list,
        description="Recently matched pattern ids, oldest first",
    )


__all__ = ["ModelPatternStoreState"]
