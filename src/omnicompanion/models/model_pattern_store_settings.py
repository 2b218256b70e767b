# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern store configuration.

Loaded from environment variables with the ``PATTERN_STORE_`` prefix, e.g.
``PATTERN_STORE_MAX_PATTERNS=800``. Defaults match the tuned values the
companion shipped with.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PatternStoreSettings(BaseSettings):
    """Pydantic Settings for the response pattern store.

    Environment variables:
        PATTERN_STORE_MAX_PATTERNS: int (default 500)
        PATTERN_STORE_MIN_MATCH_SCORE: float (default 0.4)
        PATTERN_STORE_MIN_USES_BEFORE_CULLING: int (default 5)
        PATTERN_STORE_MIN_SATISFACTION_FOR_KEEP: float (default 0.4)
        PATTERN_STORE_MIN_SUCCESS_RATE_FOR_KEEP: float (default 0.2)
        PATTERN_STORE_MAX_TEMPLATE_LENGTH: int (default 100)
        PATTERN_STORE_MIN_SATISFACTION_FOR_EXTRACTION: float (default 0.6)
        PATTERN_STORE_DUPLICATE_THRESHOLD: float (default 0.7)
        PATTERN_STORE_DUPLICATE_SITUATION_OVERLAP: float (default 0.5)
        PATTERN_STORE_RECENTLY_USED_LIMIT: int (default 20)
        PATTERN_STORE_TOP_CANDIDATES: int (default 3)
        PATTERN_STORE_SEED_ON_INIT: bool (default True)
    """

    model_config = SettingsConfigDict(
        env_prefix="PATTERN_STORE_",
        extra="ignore",
        frozen=True,
    )

    max_patterns: int = Field(default=500, ge=1, description="Store size cap")
    min_match_score: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Raw situation score below which a pattern is not a candidate",
    )
    min_uses_before_culling: int = Field(
        default=5,
        ge=0,
        description="Patterns with fewer uses are never evicted",
    )
    min_satisfaction_for_keep: float = Field(default=0.4, ge=0.0, le=1.0)
    min_success_rate_for_keep: float = Field(default=0.2, ge=0.0, le=1.0)
    max_template_length: int = Field(default=100, ge=1)
    min_satisfaction_for_extraction: float = Field(default=0.6, ge=0.0, le=1.0)
    duplicate_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Template similarity above which a candidate may be a duplicate",
    )
    duplicate_situation_overlap: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Situation overlap above which a similar template is a duplicate",
    )
    recently_used_limit: int = Field(default=20, ge=0)
    top_candidates: int = Field(
        default=3,
        ge=1,
        description="Weighted random draw happens among this many best candidates",
    )
    seed_on_init: bool = Field(default=True, description="Load the seed catalog on construction")
    coverage_intent_vocabulary_size: int = Field(default=8, ge=1)
    coverage_emotion_vocabulary_size: int = Field(default=27, ge=1)
    coverage_depth_vocabulary_size: int = Field(default=5, ge=1)


__all__ = ["PatternStoreSettings"]
