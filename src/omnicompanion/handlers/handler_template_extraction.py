# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure handlers for turning generator replies into templates.

create_template:
    Replaces every whole-word occurrence of each bound (non-empty,
    non-default) variable value in the reply with its placeholder. Longer
    values are replaced first, and text already turned into a placeholder is
    never rewritten again. A long reply (> 50 chars) that could not be
    parameterized at all is rejected as too specific to reuse.

template_similarity:
    Crude duplicate metric: placeholders are masked to ``{}``, whitespace is
    removed, then the ratio of position-wise equal characters to the longer
    length is returned. This is intentionally the same weak measure the
    learned-pattern growth was tuned against; do not swap it for an edit
    distance without re-tuning the duplicate threshold.
"""

from __future__ import annotations

import re
from typing import Final

from omnicompanion.constants import UNPARAMETERIZED_TEMPLATE_MAX_LENGTH
from omnicompanion.models import ModelTemplateVariables

_PLACEHOLDER_SPLIT: Final[re.Pattern[str]] = re.compile(r"(\{\w+\})")
_PLACEHOLDER_MASK: Final[re.Pattern[str]] = re.compile(r"\{[^}]+\}")
_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")


def create_template(response: str, variables: ModelTemplateVariables) -> str | None:
    """Build a candidate template from a generator reply.

    Args:
        response: Reply text produced by the generator.
        variables: Variables that were in effect when the reply was produced.

    Returns:
        Template text, or None if the reply cannot be turned into a template
        (empty, contains literal braces, or long and unparameterizable).
    """
    text = response.strip()
    if not text or "{" in text or "}" in text:
        return None

    template = text
    bound = variables.bound_placeholders()
    for placeholder, value in sorted(bound.items(), key=lambda item: len(item[1]), reverse=True):
        template = _replace_outside_placeholders(template, value, "{" + placeholder + "}")

    if template == text and len(template) > UNPARAMETERIZED_TEMPLATE_MAX_LENGTH:
        return None

    return template


def _replace_outside_placeholders(template: str, value: str, token: str) -> str:
    # Whole-word only: "hi" must not be replaced inside "think".
    occurrence = re.compile(rf"(?<!\w){re.escape(value)}(?!\w)")
    segments = _PLACEHOLDER_SPLIT.split(template)
    # Odd indices are placeholder tokens captured by the split.
    for index in range(0, len(segments), 2):
        segments[index] = occurrence.sub(lambda _: token, segments[index])
    return "".join(segments)


def template_similarity(first: str, second: str) -> float:
    """Position-wise character similarity after placeholder masking.

    Returns:
        1.0 for templates identical after masking, otherwise
        matching positions / longer length.
    """
    norm_first = _normalize(first)
    norm_second = _normalize(second)

    if norm_first == norm_second:
        return 1.0

    max_len = max(len(norm_first), len(norm_second))
    if max_len == 0:
        return 1.0

    common = sum(1 for a, b in zip(norm_first, norm_second) if a == b)
    return common / max_len


def _normalize(template: str) -> str:
    return _WHITESPACE.sub("", _PLACEHOLDER_MASK.sub("{}", template))


__all__ = ["create_template", "template_similarity"]
