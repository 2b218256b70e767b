# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for pattern store and autonomy handlers.

Expected conditions (no match, unusable template, malformed persisted
state) are never raised to the host. These exceptions cover programming
errors and internal decoding failures.

Error codes:
    - PATSTORE_001: Invalid argument to a pattern store operation (not recoverable)
    - AUTONOMY_001: Persisted controller state could not be decoded
      (recovered internally by substituting defaults)
"""

from __future__ import annotations


class PatternStoreValidationError(ValueError):
    """Raised when a pattern store or controller receives an invalid argument.

    Indicates a caller bug, e.g. a satisfaction or quality score outside
    [0.0, 1.0].

    Error Code: PATSTORE_001
    Recoverable: No
    Retry Strategy: None

    Example:
        >>> raise PatternStoreValidationError("satisfaction must be in [0, 1], got 1.5")
        PatternStoreValidationError: satisfaction must be in [0, 1], got 1.5
    """

    pass


class AutonomyStateError(Exception):
    """Raised while decoding a persisted autonomy controller document.

    Always caught inside the controller, logged at WARNING, and replaced by
    the documented default for the affected field. Never reaches the host.

    Error Code: AUTONOMY_001
    Recoverable: Yes
    Retry Strategy: None (defaults substituted)
    """

    pass


__all__ = ["AutonomyStateError", "PatternStoreValidationError"]
