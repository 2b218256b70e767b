# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Autonomy level enum for OmniCompanion.

This module contains the ordered autonomy scale that describes how much the
external generator is trusted or bypassed when producing a reply.

Level Flow:
    FULL_GENERATOR -> GENERATOR_PRIMARY -> HYBRID -> PATTERN_PRIMARY -> AUTONOMOUS

Promotion and demotion always move exactly one step along this order.
"""

from __future__ import annotations

from enum import Enum


class EnumAutonomyLevel(str, Enum):
    """Ordered autonomy levels, lowest trust first.

    Attributes:
        FULL_GENERATOR: Every reply comes from the generator.
        GENERATOR_PRIMARY: Generator replies, patterns are offered as hints.
        HYBRID: Patterns draft, the generator refines.
        PATTERN_PRIMARY: Patterns reply, the generator audits.
        AUTONOMOUS: Patterns reply alone for known situations.

    Example:
        >>> EnumAutonomyLevel.HYBRID.next_level()
        <EnumAutonomyLevel.PATTERN_PRIMARY: 'pattern_primary'>
        >>> EnumAutonomyLevel.FULL_GENERATOR.previous_level() is None
        True
    """

    FULL_GENERATOR = "full_generator"
    GENERATOR_PRIMARY = "generator_primary"
    HYBRID = "hybrid"
    PATTERN_PRIMARY = "pattern_primary"
    AUTONOMOUS = "autonomous"

    @property
    def rank(self) -> int:
        """Zero-based position of this level in the autonomy order."""
        return _LEVEL_ORDER.index(self)

    def next_level(self) -> EnumAutonomyLevel | None:
        """Return the level one step up, or None at the top."""
        index = self.rank + 1
        if index >= len(_LEVEL_ORDER):
            return None
        return _LEVEL_ORDER[index]

    def previous_level(self) -> EnumAutonomyLevel | None:
        """Return the level one step down, or None at the bottom."""
        index = self.rank - 1
        if index < 0:
            return None
        return _LEVEL_ORDER[index]


_LEVEL_ORDER: tuple[EnumAutonomyLevel, ...] = (
    EnumAutonomyLevel.FULL_GENERATOR,
    EnumAutonomyLevel.GENERATOR_PRIMARY,
    EnumAutonomyLevel.HYBRID,
    EnumAutonomyLevel.PATTERN_PRIMARY,
    EnumAutonomyLevel.AUTONOMOUS,
)


__all__ = ["EnumAutonomyLevel"]
