"""Shared clamping and threshold bucketing."""

from __future__ import annotations

from math import isfinite

from adaptive_engine.enums import Level, TimeOfDay

HIGH_THRESHOLD = 70.0
MEDIUM_THRESHOLD = 40.0


def clamp(value, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``; unusable input collapses to ``lower``."""

    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(lower)
    if not isfinite(number):
        return float(upper) if number > 0 else float(lower)
    return max(float(lower), min(float(upper), number))


def clamp_level(value) -> float:
    return clamp(value, 0.0, 100.0)


def clamp_unit(value) -> float:
    return clamp(value, 0.0, 1.0)


def bucket(level: float) -> Level:
    """Map a 0-100 level onto the discrete low/medium/high vocabulary."""

    if level > HIGH_THRESHOLD:
        return Level.HIGH
    if level > MEDIUM_THRESHOLD:
        return Level.MEDIUM
    return Level.LOW


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    """Return the day period a wall-clock hour belongs to."""

    hour = int(hour) % 24
    if hour < 12:
        return TimeOfDay.MORNING
    if hour < 17:
        return TimeOfDay.AFTERNOON
    if hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT
