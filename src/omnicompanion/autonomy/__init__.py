# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Graduated autonomy: strategy selection and level transitions."""

from omnicompanion.autonomy.controller import (
    STRATEGY_SCORE_THRESHOLDS,
    AutonomyController,
)

__all__ = ["STRATEGY_SCORE_THRESHOLDS", "AutonomyController"]
