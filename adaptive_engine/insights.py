"""Contextual insight ranking."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from adaptive_engine.enums import IMPORTANCE_PRIORITY, InsightType, TimeOfDay
from adaptive_engine.rules import rule_for
from adaptive_engine.schema import AnalyticInsight, Insight, ProductivityState, TodayStats

logger = logging.getLogger(__name__)

DEFAULT_CAP = 3
ANALYTIC_TYPES = frozenset({"focus", "energy"})
ANALYTIC_FOCUS_GATE = 60.0

MORNING_START = Insight(
    id="morning-start",
    type=InsightType.TIP,
    title="Start strong!",
    description="Completing your first task sets a positive tone for the day.",
    action="View today's tasks",
    action_url="/tasks?filter=today",
    priority=2,
    relevance_score=0.7,
)

AFTERNOON_BREAK = Insight(
    id="afternoon-break",
    type=InsightType.RECOMMENDATION,
    title="Break time?",
    description="You haven't taken a break today. A short pause can boost afternoon productivity.",
    action="Schedule break",
    priority=2,
    relevance_score=0.6,
)


def state_insights(state: ProductivityState) -> list[Insight]:
    template = rule_for(state.current_state).insight
    return [template] if template is not None else []


def analytic_insights(state: ProductivityState, recent: Optional[Iterable[AnalyticInsight]]) -> list[Insight]:
    """Surface focus/energy analytics while the user's focus is below the gate."""

    if not recent or state.focus_level >= ANALYTIC_FOCUS_GATE:
        return []

    mapped = []
    for entry in recent:
        if not isinstance(entry, AnalyticInsight):
            entry = AnalyticInsight.from_dict(entry)
        if entry.type not in ANALYTIC_TYPES:
            continue
        mapped.append(
            Insight(
                id=f"insight-{entry.id}",
                type=InsightType.TIP,
                title=entry.title,
                description=entry.description,
                action="Learn more" if entry.actionable else None,
                priority=IMPORTANCE_PRIORITY[entry.importance],
                relevance_score=entry.confidence,
            )
        )
    return mapped


def time_insights(state: ProductivityState, stats: Optional[TodayStats]) -> list[Insight]:
    if stats is None:
        return []

    found = []
    if state.time_of_day == TimeOfDay.MORNING and stats.tasks_completed == 0:
        found.append(MORNING_START)
    if state.time_of_day == TimeOfDay.AFTERNOON and stats.breaks_taken == 0:
        found.append(AFTERNOON_BREAK)
    return found


def build_insights(
    state,
    recent_analytics: Optional[Iterable[AnalyticInsight]] = None,
    today_stats: Optional[TodayStats] = None,
    cap: int = DEFAULT_CAP,
) -> list[Insight]:
    """Merge state, analytic and time-of-day insights and keep the top ``cap``.

    Missing analytics or stats (an upstream fetch failed) only drop the
    insights that depend on them.
    """

    state = ProductivityState.coerce(state)
    if today_stats is not None and not isinstance(today_stats, TodayStats):
        today_stats = TodayStats.from_dict(today_stats)

    merged = [
        *state_insights(state),
        *analytic_insights(state, recent_analytics),
        *time_insights(state, today_stats),
    ]
    if cap <= 0 or not merged:
        return []

    weights = np.asarray([insight.weight for insight in merged], dtype=float)
    order = np.argsort(-weights, kind="stable")
    ranked = [merged[index] for index in order[:cap]]
    logger.debug("Built %d of %d insights for state %s", len(ranked), len(merged), state.current_state.value)
    return ranked
