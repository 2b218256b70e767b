# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Autonomy controller configuration, loaded from ``AUTONOMY_*`` env vars."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AutonomySettings(BaseSettings):
    """Pydantic Settings for the autonomy controller.

    Environment variables:
        AUTONOMY_AUDIT_INTERVAL: int (default 200)
        AUTONOMY_QUALITY_DROP_THRESHOLD: float (default 0.15)
        AUTONOMY_ABSOLUTE_QUALITY_FLOOR: float (default 0.3)
        AUTONOMY_MIN_SAMPLES_FOR_DEMOTION: int (default 10)
        AUTONOMY_RECENT_WINDOW: int (default 20)
        AUTONOMY_QUALITY_WINDOW_SIZE: int (default 50)
        AUTONOMY_AUDIT_HISTORY_LIMIT: int (default 50)
        AUTONOMY_ENABLE_AUTO_PROMOTION: bool (default True)
        AUTONOMY_ENABLE_AUTO_DEMOTION: bool (default True)
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTONOMY_",
        extra="ignore",
        frozen=True,
    )

    audit_interval: int = Field(default=200, ge=1, description="Ticks between quality audits")
    quality_drop_threshold: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Older-minus-recent mean drop that triggers demotion",
    )
    absolute_quality_floor: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Recent mean below this always triggers demotion",
    )
    min_samples_for_demotion: int = Field(default=10, ge=1)
    recent_window: int = Field(
        default=20,
        ge=1,
        description="Number of newest samples compared against the older ones",
    )
    quality_window_size: int = Field(default=50, ge=1)
    audit_history_limit: int = Field(default=50, ge=1)
    enable_auto_promotion: bool = Field(default=True)
    enable_auto_demotion: bool = Field(default=True)


__all__ = ["AutonomySettings"]
