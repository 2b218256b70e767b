# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Response strategy discriminator enum for OmniCompanion.

One value per strategy variant. Used as the discriminator field of the
ResponseStrategy union so hosts can match on it exhaustively.
"""

from enum import Enum


class EnumStrategyType(str, Enum):
    """Discriminator for response strategies.

    Attributes:
        GENERATOR_ONLY: Call the generator with the base prompt.
        GENERATOR_WITH_HINT: Call the generator, passing a pattern as a hint.
        PATTERN_DRAFT_REFINE: Ask the generator to refine a pattern draft.
        PATTERN_WITH_AUDIT: Reply with the pattern, generator audits it.
        PATTERN_ONLY: Reply with the pattern, generator is bypassed.
    """

    GENERATOR_ONLY = "generator_only"
    GENERATOR_WITH_HINT = "generator_with_hint"
    PATTERN_DRAFT_REFINE = "pattern_draft_refine"
    PATTERN_WITH_AUDIT = "pattern_with_audit"
    PATTERN_ONLY = "pattern_only"


__all__ = ["EnumStrategyType"]
