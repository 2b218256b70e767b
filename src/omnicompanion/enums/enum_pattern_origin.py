# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern origin enum for OmniCompanion."""

from enum import Enum


class EnumPatternOrigin(str, Enum):
    """Where a response pattern came from.

    Attributes:
        SEED: Loaded from the startup catalog. Never evicted.
        LEARNED: Extracted at runtime from a high-quality generator reply.
    """

    SEED = "seed"
    LEARNED = "learned"


__all__ = ["EnumPatternOrigin"]
