# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure template expansion handler.

Substitutes ModelTemplateVariables into a pattern template.

Expansion Rules:
    - ``{name}`` with a value        -> the value (an empty string included)
    - soft variable without a value  -> documented default
      (visitorName -> "you", timeExpression -> "now", moodExpression -> "")
    - hard variable without a value  -> missing; the clause containing it is
      deleted up to the nearest clause/sentence punctuation, along with any
      punctuation the deletion leaves at the start of the text
    - after repairs, text shorter than 3 characters -> no expansion (None)
    - punctuation runs left behind by deletions are collapsed

The result never contains a literal ``{`` or ``}``; a template that would
leak one yields None instead.

Usage:
    from omnicompanion.handlers.handler_template_expansion import expand_template

    text = expand_template("hi...{timeExpression}", variables)
    if text is None:
        ...  # pattern unusable for this request
"""

from __future__ import annotations

import re
from typing import Final

from omnicompanion.constants import MIN_EXPANDED_LENGTH
from omnicompanion.models import SOFT_VARIABLE_DEFAULTS, ModelTemplateVariables

PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{(\w+)\}")
"""Matches a single ``{name}`` placeholder token."""

_CLAUSE_DELIMITERS: Final[str] = ".,;!?。、！？"

_ELLIPSIS_RUN: Final[re.Pattern[str]] = re.compile(r"\.{4,}")
_REPEATED_PUNCTUATION: Final[re.Pattern[str]] = re.compile(r"([,;!?。、！？])\1+")
_SPACE_BEFORE_PUNCTUATION: Final[re.Pattern[str]] = re.compile(r"\s+([,;!?。、！？])")
_WHITESPACE_RUN: Final[re.Pattern[str]] = re.compile(r"\s{2,}")
_LEADING_DELIMITERS: Final[re.Pattern[str]] = re.compile(r"^[\s.…,;!?。、！？]+")


def expand_template(template: str, variables: ModelTemplateVariables) -> str | None:
    """Expand a template with the given variables.

    Args:
        template: Template text containing ``{name}`` placeholders.
        variables: Values for this request.

    Returns:
        The expanded text, or None when no usable expansion exists.
    """
    missing: list[str] = []

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = variables.value_for(name)
        if value is not None:
            return value
        if name in SOFT_VARIABLE_DEFAULTS:
            return SOFT_VARIABLE_DEFAULTS[name]
        if match.group(0) not in missing:
            missing.append(match.group(0))
        return match.group(0)

    result = PLACEHOLDER_PATTERN.sub(substitute, template)

    if missing:
        for token in missing:
            result = _delete_clause(result, token)
        # A clause deleted from the front can leave its neighbour's delimiter behind.
        result = _LEADING_DELIMITERS.sub("", result)
        if len(result.strip()) < MIN_EXPANDED_LENGTH:
            return None

    result = _normalize_punctuation(result)

    if "{" in result or "}" in result:
        return None

    return result or None


def find_placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    names: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


def _delete_clause(text: str, token: str) -> str:
    """Remove every clause containing ``token``, with its trailing delimiter."""
    delimiters = re.escape(_CLAUSE_DELIMITERS)
    clause = re.compile(
        rf"[^{delimiters}]*{re.escape(token)}[^{delimiters}]*[{delimiters}]?"
    )
    return clause.sub("", text)


def _normalize_punctuation(text: str) -> str:
    text = _ELLIPSIS_RUN.sub("...", text)
    text = _REPEATED_PUNCTUATION.sub(r"\1", text)
    text = _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip().lstrip(",;、").strip()


__all__ = ["PLACEHOLDER_PATTERN", "expand_template", "find_placeholders"]
