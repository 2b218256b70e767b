# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Response strategy models.

A strategy tells the host how to produce the next reply. It is a closed
tagged union discriminated on ``strategy_type``; hosts should match on the
discriminator exhaustively so that a new variant cannot be silently ignored.

Variants (least to most autonomous):
    - ModelGeneratorOnlyStrategy: generator replies from the base prompt
    - ModelGeneratorWithHintStrategy: generator replies, pattern given as hint
    - ModelPatternDraftRefineStrategy: pattern drafts, generator refines
    - ModelPatternWithAuditStrategy: pattern replies, generator audits
    - ModelPatternOnlyStrategy: pattern replies, generator bypassed
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from omnicompanion.enums import EnumStrategyType


class ModelGeneratorOnlyStrategy(BaseModel):
    """Call the generator with no pattern involvement."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy_type: Literal[EnumStrategyType.GENERATOR_ONLY] = EnumStrategyType.GENERATOR_ONLY


class ModelGeneratorWithHintStrategy(BaseModel):
    """Call the generator and show it a well-received pattern as a hint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy_type: Literal[EnumStrategyType.GENERATOR_WITH_HINT] = (
        EnumStrategyType.GENERATOR_WITH_HINT
    )
    pattern_id: str = Field(..., min_length=1, description="Pattern offered as hint")
    template: str = Field(..., min_length=1, description="Expanded pattern text")


class ModelPatternDraftRefineStrategy(BaseModel):
    """Use the pattern as a draft the generator lightly refines."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy_type: Literal[EnumStrategyType.PATTERN_DRAFT_REFINE] = (
        EnumStrategyType.PATTERN_DRAFT_REFINE
    )
    pattern_id: str = Field(..., min_length=1, description="Pattern used as draft")
    draft: str = Field(..., min_length=1, description="Expanded draft text")


class ModelPatternWithAuditStrategy(BaseModel):
    """Reply with the pattern; the generator only checks it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy_type: Literal[EnumStrategyType.PATTERN_WITH_AUDIT] = (
        EnumStrategyType.PATTERN_WITH_AUDIT
    )
    pattern_id: str = Field(..., min_length=1, description="Pattern used for the reply")
    response: str = Field(..., min_length=1, description="Reply text to audit")


class ModelPatternOnlyStrategy(BaseModel):
    """Reply with the pattern; the generator is bypassed entirely."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy_type: Literal[EnumStrategyType.PATTERN_ONLY] = EnumStrategyType.PATTERN_ONLY
    pattern_id: str = Field(..., min_length=1, description="Pattern used for the reply")
    response: str = Field(..., min_length=1, description="Final reply text")


ResponseStrategy = Annotated[
    ModelGeneratorOnlyStrategy
    | ModelGeneratorWithHintStrategy
    | ModelPatternDraftRefineStrategy
    | ModelPatternWithAuditStrategy
    | ModelPatternOnlyStrategy,
    Field(discriminator="strategy_type"),
]
"""Closed union of every response strategy, discriminated on strategy_type."""

RESPONSE_STRATEGY_ADAPTER: TypeAdapter[ResponseStrategy] = TypeAdapter(ResponseStrategy)
"""Validates a plain dict (e.g. from a host message) into a strategy variant."""


__all__ = [
    "RESPONSE_STRATEGY_ADAPTER",
    "ModelGeneratorOnlyStrategy",
    "ModelGeneratorWithHintStrategy",
    "ModelPatternDraftRefineStrategy",
    "ModelPatternOnlyStrategy",
    "ModelPatternWithAuditStrategy",
    "ResponseStrategy",
]
