"""Closed vocabularies shared by the recommendation and insight engines."""

from __future__ import annotations

from enum import Enum


class _Vocabulary(str, Enum):
    @classmethod
    def parse(cls, value, default=None):
        """Return the member matching ``value`` or ``default`` when unrecognised."""

        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.value
        if value is not None:
            key = str(value).strip().lower().replace("_", "-")
            for member in cls:
                if member.value == key:
                    return member
        return default


class Level(_Vocabulary):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StateName(_Vocabulary):
    FOCUSED = "focused"
    DEEP_WORK = "deep-work"
    ENERGIZED = "energized"
    TIRED = "tired"
    DISTRACTED = "distracted"
    OVERWHELMED = "overwhelmed"
    PLANNING = "planning"
    NEUTRAL = "neutral"


class TimeOfDay(_Vocabulary):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class InsightType(_Vocabulary):
    TIP = "tip"
    ACHIEVEMENT = "achievement"
    RECOMMENDATION = "recommendation"
    PATTERN = "pattern"


IMPORTANCE_PRIORITY = {Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1}
