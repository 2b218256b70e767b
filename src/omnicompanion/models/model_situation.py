# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelSituation - normalized snapshot of what is happening right now."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer

SITUATION_DIMENSIONS: tuple[str, ...] = (
    "intents",
    "emotions",
    "depths",
    "time_of_day",
    "relationship_phases",
    "keywords",
)


class ModelSituation(BaseModel):
    """Situation descriptor used to learn and match response patterns.

    Each dimension is a set of free-form labels produced by the upstream
    simulators and analyzers. An empty set means the dimension is
    unconstrained: a pattern with an empty set matches anything on that axis.

    Attributes:
        intents: Conversational intents (greeting, farewell, question, ...).
        emotions: Current emotions (joy, melancholy, curiosity, ...).
        depths: Conversational depths (surface, casual, intimate, ...).
        time_of_day: Time-of-day buckets (dawn, morning, night, ...).
        relationship_phases: Relationship phases (stranger, companion, ...).
        keywords: Free-text keywords, matched by substring.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    intents: frozenset[str] = Field(
        default_factory=frozenset,
        description="Conversational intents",
    )
    emotions: frozenset[str] = Field(
        default_factory=frozenset,
        description="Current emotions",
    )
    depths: frozenset[str] = Field(
        default_factory=frozenset,
        description="Conversational depths",
    )
    time_of_day: frozenset[str] = Field(
        default_factory=frozenset,
        description="Time-of-day buckets",
    )
    relationship_phases: frozenset[str] = Field(
        default_factory=frozenset,
        description="Relationship phases",
    )
    keywords: frozenset[str] = Field(
        default_factory=frozenset,
        description="Free-text keywords (substring matched)",
    )

    @field_serializer(*SITUATION_DIMENSIONS)
    def serialize_label_set(self, value: frozenset[str]) -> list[str]:
        # Sorted output keeps persisted documents stable across runs.
        return sorted(value)

    def dimension(self, name: str) -> frozenset[str]:
        """Return the label set for a dimension by field name."""
        if name not in SITUATION_DIMENSIONS:
            raise KeyError(f"Unknown situation dimension: {name}")
        value: frozenset[str] = getattr(self, name)
        return value


__all__ = ["SITUATION_DIMENSIONS", "ModelSituation"]
