# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelTemplateVariables - per-request values substituted into templates.

Templates reference variables with camelCase placeholders such as
``{visitorName}``. PLACEHOLDER_FIELDS maps each placeholder name to the
model field holding its value. Three variables are "soft": when absent they
fall back to SOFT_VARIABLE_DEFAULTS instead of making the template unusable.
"""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

PLACEHOLDER_FIELDS: Final[dict[str, str]] = {
    "visitorName": "visitor_name",
    "timeExpression": "time_expression",
    "moodExpression": "mood_expression",
    "currentActivity": "current_activity",
    "interruptedActivity": "interrupted_activity",
    "recentLearning": "recent_learning",
    "thingToTell": "thing_to_tell",
    "pastTopic": "past_topic",
    "weatherExpression": "weather_expression",
    "greeting": "greeting",
    "emotionReason": "emotion_reason",
}
"""Placeholder name (as written in templates) -> ModelTemplateVariables field."""

SOFT_VARIABLE_DEFAULTS: Final[dict[str, str]] = {
    "visitorName": "you",
    "timeExpression": "now",
    "moodExpression": "",
}
"""Defaults for soft placeholders. Any other placeholder is hard."""


class ModelTemplateVariables(BaseModel):
    """Optional named strings substituted into response templates.

    Supplied fresh by the host for every request and never mutated here.
    None means "not available for this request".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    visitor_name: str | None = Field(default=None, description="How the visitor is addressed")
    time_expression: str | None = Field(default=None, description="Time-of-day phrase")
    mood_expression: str | None = Field(default=None, description="Current mood phrase")
    current_activity: str | None = Field(default=None, description="What the companion is doing")
    interrupted_activity: str | None = Field(
        default=None, description="Activity interrupted by the visitor"
    )
    recent_learning: str | None = Field(default=None, description="Something recently learned")
    thing_to_tell: str | None = Field(default=None, description="Something the companion wants to share")
    past_topic: str | None = Field(default=None, description="A related past topic")
    weather_expression: str | None = Field(default=None, description="Weather phrase")
    greeting: str | None = Field(default=None, description="Greeting phrase")
    emotion_reason: str | None = Field(default=None, description="Why the companion feels this way")

    def value_for(self, placeholder: str) -> str | None:
        """Return the value bound to a placeholder name, or None.

        Unknown placeholder names resolve to None and are treated as hard
        variables by the expander.
        """
        field_name = PLACEHOLDER_FIELDS.get(placeholder)
        if field_name is None:
            return None
        value: str | None = getattr(self, field_name)
        return value

    def bound_placeholders(self) -> dict[str, str]:
        """Return placeholder -> value for every non-empty, non-default value."""
        bound: dict[str, str] = {}
        for placeholder in PLACEHOLDER_FIELDS:
            value = self.value_for(placeholder)
            if not value:
                continue
            if SOFT_VARIABLE_DEFAULTS.get(placeholder) == value:
                continue
            bound[placeholder] = value
        return bound


__all__ = [
    "PLACEHOLDER_FIELDS",
    "SOFT_VARIABLE_DEFAULTS",
    "ModelTemplateVariables",
]
