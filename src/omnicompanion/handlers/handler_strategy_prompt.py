# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure helpers that tell the host how to run a response strategy."""

from __future__ import annotations

from omnicompanion.models import (
    ModelGeneratorOnlyStrategy,
    ModelGeneratorWithHintStrategy,
    ModelPatternDraftRefineStrategy,
    ModelPatternOnlyStrategy,
    ModelPatternWithAuditStrategy,
    ResponseStrategy,
)


def needs_generator(strategy: ResponseStrategy) -> bool:
    """Return True when the host must call the generator for this strategy.

    Only the pure-pattern strategy skips the generator. The audit strategy
    still calls it to check the pattern reply.
    """
    return not isinstance(strategy, ModelPatternOnlyStrategy)


def augment_prompt(strategy: ResponseStrategy, base_prompt: str) -> str:
    """Fold the strategy's pattern text into the generator prompt.

    Args:
        strategy: Strategy returned by AutonomyController.decide().
        base_prompt: Prompt the host would send for a generator-only reply.

    Returns:
        The prompt to send, or "" for the pure-pattern strategy.
    """
    if isinstance(strategy, ModelGeneratorOnlyStrategy):
        return base_prompt

    if isinstance(strategy, ModelGeneratorWithHintStrategy):
        return (
            f"{base_prompt}\n\n[Reference]\n"
            f"A reply like this was well received before:\n"
            f"\"{strategy.template}\"\n"
            f"Use its tone as a reference, but answer for the current situation."
        )

    if isinstance(strategy, ModelPatternDraftRefineStrategy):
        return (
            f"{base_prompt}\n\n[Draft]\n"
            f"Polish this draft so it fits the current situation naturally:\n"
            f"\"{strategy.draft}\"\n"
            f"Keep it close to the draft; only make the adjustments needed."
        )

    if isinstance(strategy, ModelPatternWithAuditStrategy):
        return (
            f"Check whether the reply below is appropriate. If it has a problem, "
            f"return a corrected version; otherwise return it unchanged:\n"
            f"\"{strategy.response}\"\n\nSituation:\n{base_prompt}"
        )

    return ""


__all__ = ["augment_prompt", "needs_generator"]
