# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelResponsePattern - a learned or seeded situation -> template association."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omnicompanion.enums import EnumPatternOrigin
from omnicompanion.models.model_situation import ModelSituation


class ModelResponsePattern(BaseModel):
    """Response pattern owned by the pattern store.

    Unlike most models in this package the pattern is mutable: the store
    updates usage statistics in place on every match and feedback event.
    Counters only move through the store's own mutation paths, which keeps
    ``success_count <= use_count``.

    Attributes:
        pattern_id: Opaque id (``pat_<n>``) from the owning store's counter.
        situation: Situation the pattern was learned for.
        template: Response text with ``{placeholder}`` tokens.
        success_count: Successful uses (never exceeds use_count).
        use_count: Times the pattern was used or reinforced.
        avg_satisfaction: Running satisfaction average in [0, 1].
        last_used: Logical tick of the last use (0 = never).
        origin: SEED (protected from eviction) or LEARNED.
        emotion_tags: Up to three emotion labels, for display only.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    pattern_id: str = Field(..., min_length=1, description="Opaque pattern id")
    situation: ModelSituation = Field(
        default_factory=ModelSituation,
        description="Situation the pattern applies to",
    )
    template: str = Field(..., min_length=1, description="Template with {placeholder} tokens")
    success_count: int = Field(default=0, ge=0, description="Successful uses")
    use_count: int = Field(default=0, ge=0, description="Total uses")
    avg_satisfaction: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Running average satisfaction",
    )
    last_used: int = Field(default=0, ge=0, description="Tick of last use (0 = never)")
    origin: EnumPatternOrigin = Field(
        default=EnumPatternOrigin.LEARNED,
        description="Pattern provenance",
    )
    emotion_tags: list[str] = Field(
        default_factory=list,
        max_length=3,
        description="Display-only emotion tags",
    )

    @property
    def success_rate(self) -> float:
        """success_count / use_count, or 0.0 for an unused pattern."""
        if self.use_count <= 0:
            return 0.0
        return self.success_count / self.use_count

    @property
    def is_seed(self) -> bool:
        return self.origin == EnumPatternOrigin.SEED


__all__ = ["ModelResponsePattern"]
