# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Response pattern store: learned and seeded situation -> template patterns."""

from omnicompanion.pattern_store.seed_catalog import SEED_PATTERNS, SeedPatternDict
from omnicompanion.pattern_store.store import ResponsePatternStore

__all__ = ["SEED_PATTERNS", "ResponsePatternStore", "SeedPatternDict"]
