"""Core data schema for productivity states, candidates and engine output."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from math import isfinite
from typing import Any, Iterable, Optional

from adaptive_engine.enums import InsightType, Level, StateName, TimeOfDay
from adaptive_engine.thresholds import clamp_level, clamp_unit

logger = logging.getLogger(__name__)

FALLBACK_SUGGESTED_ACTIONS = (
    "Check your current priorities",
    "Take a moment to plan your next steps",
)


def _pick(payload: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _normalize_tags(tags: Iterable[str] | str | None) -> tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = [tags]
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = str(tag).strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def _normalize_actions(actions: Any) -> tuple[str, ...]:
    if actions is None:
        return ()
    if isinstance(actions, str):
        actions = [actions]
    try:
        return tuple(str(action) for action in actions)
    except TypeError:
        logger.debug("Ignoring non-iterable suggested actions %r", actions)
        return ()


def _non_negative_int(value: Any) -> int:
    try:
        return max(0, int(value))
    except OverflowError:
        # +/-inf saturate like the level clamps do
        return sys.maxsize if value > 0 else 0
    except (TypeError, ValueError):
        return 0


def _positive_duration(value: Any, item_id: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Candidate {item_id}: invalid estimated_duration {value!r}")
    try:
        number = value if isinstance(value, int) else float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Candidate {item_id}: invalid estimated_duration {value!r}") from exc
    if isinstance(number, float) and not (isfinite(number) and number.is_integer()):
        raise ValueError(f"Candidate {item_id}: estimated_duration must be a whole number of minutes, got {value!r}")
    duration = int(number)
    if duration <= 0:
        raise ValueError(f"Candidate {item_id}: estimated_duration must be positive, got {duration}")
    return duration


def _parse_level(value: Any, field_name: str, default: Level) -> Level:
    level = Level.parse(value)
    if level is None:
        logger.debug("Unrecognised %s %r, using %s", field_name, value, default.value)
        return default
    return level


@dataclass(frozen=True)
class ProductivityState:
    """Immutable snapshot of the classified productivity state.

    Numeric fields are clamped to their declared ranges and unknown
    vocabulary values are normalized, so every instance is in-domain.
    """

    current_state: StateName = StateName.NEUTRAL
    energy_level: float = 50.0
    focus_level: float = 50.0
    workload_level: float = 50.0
    confidence: float = 0.5
    time_of_day: TimeOfDay = TimeOfDay.MORNING
    suggested_actions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        state = StateName.parse(self.current_state)
        if state is None:
            logger.debug("Unrecognised productivity state %r, treating as neutral", self.current_state)
            state = StateName.NEUTRAL
        period = TimeOfDay.parse(self.time_of_day)
        if period is None:
            logger.debug("Unrecognised time of day %r, using morning", self.time_of_day)
            period = TimeOfDay.MORNING

        object.__setattr__(self, "current_state", state)
        object.__setattr__(self, "time_of_day", period)
        object.__setattr__(self, "energy_level", clamp_level(self.energy_level))
        object.__setattr__(self, "focus_level", clamp_level(self.focus_level))
        object.__setattr__(self, "workload_level", clamp_level(self.workload_level))
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))
        object.__setattr__(self, "suggested_actions", _normalize_actions(self.suggested_actions))

    @classmethod
    def from_dict(cls, payload: dict) -> "ProductivityState":
        """Build a state from camelCase or snake_case keys."""

        return cls(
            current_state=_pick(payload, "currentState", "current_state", default=StateName.NEUTRAL),
            energy_level=_pick(payload, "energyLevel", "energy_level", default=50.0),
            focus_level=_pick(payload, "focusLevel", "focus_level", default=50.0),
            workload_level=_pick(payload, "workloadLevel", "workload_level", default=50.0),
            confidence=_pick(payload, "confidence", default=0.5),
            time_of_day=_pick(payload, "timeOfDay", "time_of_day", default=TimeOfDay.MORNING),
            suggested_actions=_pick(payload, "suggestedActions", "suggested_actions", default=()),
        )

    @classmethod
    def coerce(cls, value) -> "ProductivityState":
        if isinstance(value, cls):
            return value
        return cls.from_dict(dict(value or {}))

    def to_dict(self) -> dict:
        return {
            "currentState": self.current_state.value,
            "energyLevel": self.energy_level,
            "focusLevel": self.focus_level,
            "workloadLevel": self.workload_level,
            "confidence": self.confidence,
            "timeOfDay": self.time_of_day.value,
            "suggestedActions": list(self.suggested_actions),
        }


def fallback_state(time_of_day: TimeOfDay | str = TimeOfDay.MORNING) -> ProductivityState:
    """State used when no classification is available yet."""

    return ProductivityState(
        current_state=StateName.ENERGIZED,
        energy_level=60,
        focus_level=60,
        workload_level=50,
        confidence=0.3,
        time_of_day=time_of_day,
        suggested_actions=FALLBACK_SUGGESTED_ACTIONS,
    )


@dataclass(frozen=True)
class CandidateItem:
    """Recommendable task from a catalog snapshot."""

    id: str
    title: str
    description: str
    estimated_duration: int
    energy_required: Level
    focus_required: Level
    category: str
    priority: Level
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        item_id = str(self.id).strip() if self.id is not None else ""
        if not item_id:
            raise ValueError("Candidate item requires a non-empty id")

        duration = _positive_duration(self.estimated_duration, item_id)

        object.__setattr__(self, "id", item_id)
        object.__setattr__(self, "title", str(self.title or ""))
        object.__setattr__(self, "description", str(self.description or ""))
        object.__setattr__(self, "estimated_duration", duration)
        object.__setattr__(self, "energy_required", _parse_level(self.energy_required, "energy_required", Level.MEDIUM))
        object.__setattr__(self, "focus_required", _parse_level(self.focus_required, "focus_required", Level.MEDIUM))
        object.__setattr__(self, "priority", _parse_level(self.priority, "priority", Level.MEDIUM))
        object.__setattr__(self, "category", str(self.category or "").strip())
        object.__setattr__(self, "tags", _normalize_tags(self.tags))

    @classmethod
    def from_dict(cls, payload: dict) -> "CandidateItem":
        return cls(
            id=_pick(payload, "id"),
            title=_pick(payload, "title", default=""),
            description=_pick(payload, "description", default=""),
            estimated_duration=_pick(payload, "estimatedDuration", "estimated_duration"),
            energy_required=_pick(payload, "energyRequired", "energy_required", default=Level.MEDIUM),
            focus_required=_pick(payload, "focusRequired", "focus_required", default=Level.MEDIUM),
            category=_pick(payload, "category", default=""),
            priority=_pick(payload, "priority", default=Level.MEDIUM),
            tags=_pick(payload, "tags", default=()),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "estimatedDuration": self.estimated_duration,
            "energyRequired": self.energy_required.value,
            "focusRequired": self.focus_required.value,
            "category": self.category,
            "priority": self.priority.value,
            "tags": list(self.tags),
        }


def validate_catalog(items: Iterable[CandidateItem]) -> tuple[CandidateItem, ...]:
    """Return the catalog as an immutable snapshot, rejecting duplicate ids."""

    snapshot = tuple(items)
    seen: set[str] = set()
    for item in snapshot:
        if item.id in seen:
            raise ValueError(f"Duplicate candidate id '{item.id}' in catalog")
        seen.add(item.id)
    return snapshot


@dataclass(frozen=True)
class Recommendation(CandidateItem):
    """Candidate item annotated with a match reason and confidence."""

    match_reason: str = ""
    confidence: float = 0.0

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))

    @classmethod
    def from_item(cls, item: CandidateItem, match_reason: str, confidence: float) -> "Recommendation":
        values = {f.name: getattr(item, f.name) for f in fields(CandidateItem)}
        return cls(**values, match_reason=match_reason, confidence=confidence)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["matchReason"] = self.match_reason
        payload["confidence"] = self.confidence
        return payload


@dataclass(frozen=True)
class Insight:
    """Ranked insight card produced by the insight engine."""

    id: str
    type: InsightType
    title: str
    description: str
    priority: int
    relevance_score: float
    action: Optional[str] = None
    action_url: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", InsightType.parse(self.type, InsightType.TIP))
        object.__setattr__(self, "priority", _non_negative_int(self.priority))
        object.__setattr__(self, "relevance_score", clamp_unit(self.relevance_score))

    @property
    def weight(self) -> float:
        return self.priority * self.relevance_score

    def to_dict(self) -> dict:
        payload = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "relevanceScore": self.relevance_score,
        }
        if self.action is not None:
            payload["action"] = self.action
        if self.action_url is not None:
            payload["actionUrl"] = self.action_url
        return payload


@dataclass(frozen=True)
class AnalyticInsight:
    """Insight produced by the external analytics service."""

    id: str
    type: str
    title: str
    description: str
    importance: Level = Level.LOW
    confidence: float = 0.0
    actionable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "type", str(self.type or "").strip().lower())
        object.__setattr__(self, "importance", _parse_level(self.importance, "importance", Level.LOW))
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))
        object.__setattr__(self, "actionable", bool(self.actionable))

    @classmethod
    def from_dict(cls, payload: dict) -> "AnalyticInsight":
        return cls(
            id=_pick(payload, "id", default=""),
            type=_pick(payload, "type", default=""),
            title=_pick(payload, "title", default=""),
            description=_pick(payload, "description", default=""),
            importance=_pick(payload, "importance", default=Level.LOW),
            confidence=_pick(payload, "confidence", default=0.0),
            actionable=_pick(payload, "actionable", default=False),
        )


@dataclass(frozen=True)
class TodayStats:
    """Daily activity counters from the analytics service."""

    tasks_completed: int = 0
    breaks_taken: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tasks_completed", _non_negative_int(self.tasks_completed))
        object.__setattr__(self, "breaks_taken", _non_negative_int(self.breaks_taken))

    @classmethod
    def from_dict(cls, payload: dict) -> "TodayStats":
        return cls(
            tasks_completed=_pick(payload, "tasksCompleted", "tasks_completed", default=0),
            breaks_taken=_pick(payload, "breaksTaken", "breaks_taken", default=0),
        )
