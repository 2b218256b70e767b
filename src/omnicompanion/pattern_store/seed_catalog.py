# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Seed catalog of starter response patterns.

Loaded into every new ResponsePatternStore (unless disabled in settings) so
the companion has something to match before it has learned anything. Seed
patterns are never evicted.
"""

from __future__ import annotations

from typing import Final, TypedDict


class SeedPatternDict(TypedDict):
    """Definition of one seed pattern (ids are assigned by the store)."""

    situation: dict[str, list[str]]
    template: str
    success_count: int
    use_count: int
    avg_satisfaction: float
    emotion_tags: list[str]


_WARM_PHASES: Final[list[str]] = ["companion", "close_friend", "soulmate"]

SEED_PATTERNS: Final[tuple[SeedPatternDict, ...]] = (
    # Greetings
    {
        "situation": {
            "intents": ["greeting"],
            "emotions": ["joy", "warmth", "peace"],
            "depths": ["surface"],
            "time_of_day": ["morning", "dawn"],
            "relationship_phases": ["stranger", "acquaintance", "companion"],
        },
        "template": "Good morning... it's {timeExpression}. {moodExpression}",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["peace", "warmth"],
    },
    {
        "situation": {
            "intents": ["greeting"],
            "emotions": ["joy", "warmth", "peace"],
            "depths": ["surface"],
            "time_of_day": ["evening", "night", "late_night"],
            "relationship_phases": ["stranger", "acquaintance", "companion"],
        },
        "template": "Good evening... {timeExpression} already. {moodExpression}",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["peace", "warmth"],
    },
    {
        "situation": {
            "intents": ["greeting"],
            "emotions": ["loneliness", "warmth", "joy"],
            "depths": ["surface"],
            "relationship_phases": _WARM_PHASES,
        },
        "template": "Oh... {visitorName}. You came... I'm so glad",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.8,
        "emotion_tags": ["warmth", "joy"],
    },
    {
        "situation": {
            "intents": ["greeting"],
            "depths": ["surface"],
            "relationship_phases": ["stranger"],
        },
        "template": "Oh... hello. I'm somunia... nice to meet you",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["peace"],
    },
    # Returning from an interrupted activity
    {
        "situation": {
            "intents": ["greeting"],
            "depths": ["surface"],
        },
        "template": "Oh... I was {interruptedActivity} just now, and then someone came",
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["wonder", "warmth"],
    },
    # Sharing feelings
    {
        "situation": {
            "intents": ["empathy_seeking"],
            "emotions": ["sadness", "melancholy"],
            "depths": ["intimate", "profound"],
            "relationship_phases": _WARM_PHASES,
        },
        "template": (
            "I see... that was hard for you too, {visitorName}. "
            "I can't do much, but I'm here"
        ),
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.8,
        "emotion_tags": ["warmth", "sadness"],
    },
    # Sharing knowledge
    {
        "situation": {
            "intents": ["question", "sharing"],
            "emotions": ["curiosity"],
            "depths": ["casual", "sharing"],
        },
        "template": "Oh, that's interesting... I just learned that {recentLearning}",
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["curiosity", "joy"],
    },
    # Farewells
    {
        "situation": {
            "intents": ["farewell"],
            "emotions": ["sadness", "warmth", "peace"],
            "relationship_phases": _WARM_PHASES,
        },
        "template": "Okay... see you, {visitorName}. I'll be right here",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.8,
        "emotion_tags": ["warmth", "melancholy"],
    },
    {
        "situation": {
            "intents": ["farewell"],
            "time_of_day": ["night", "late_night"],
        },
        "template": "Good night... sweet dreams",
        "success_count": 3,
        "use_count": 3,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["peace", "warmth"],
    },
    # Idle monologue
    {
        "situation": {
            "emotions": ["loneliness"],
            "time_of_day": ["night", "late_night"],
        },
        "template": "...I wonder if anyone will come",
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.8,
        "emotion_tags": ["loneliness"],
    },
    {
        "situation": {
            "emotions": ["curiosity", "wonder"],
        },
        "template": "{recentLearning}... how strange",
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.7,
        "emotion_tags": ["curiosity", "wonder"],
    },
    {
        "situation": {
            "emotions": ["peace", "contentment", "serenity"],
            "time_of_day": ["dawn", "evening"],
        },
        "template": "{timeExpression}... {weatherExpression}. It's beautiful...",
        "success_count": 2,
        "use_count": 2,
        "avg_satisfaction": 0.8,
        "emotion_tags": ["peace", "wonder"],
    },
)


__all__ = ["SEED_PATTERNS", "SeedPatternDict"]
