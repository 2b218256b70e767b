# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Shared protocol definitions for OmniCompanion.

The autonomy controller depends on the pattern store only through
ProtocolPatternStore, so tests can substitute a stub with fixed coverage
and statistics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnicompanion.models import (
        ModelPatternMatch,
        ModelPatternStoreStats,
        ModelSituation,
        ModelTemplateVariables,
    )


@runtime_checkable
class ProtocolPatternStore(Protocol):
    """Operations the autonomy controller needs from a pattern store."""

    def find_best_match(
        self,
        situation: ModelSituation,
        variables: ModelTemplateVariables,
        tick: int,
        *,
        correlation_id: str | None = None,
    ) -> ModelPatternMatch | None:
        """Select a pattern for the situation, or None when nothing fits."""
        ...

    def feedback(self, pattern_id: str, success: bool, satisfaction: float) -> None:
        """Apply the observed outcome of a pattern use."""
        ...

    def cull_low_quality(self) -> int:
        """Evict low-value learned patterns; return how many were removed."""
        ...

    def coverage(self) -> float:
        """Fraction of the intent/emotion/depth vocabularies covered."""
        ...

    def get_stats(self) -> ModelPatternStoreStats:
        """Aggregate statistics over stored patterns."""
        ...


__all__ = ["ProtocolPatternStore"]
