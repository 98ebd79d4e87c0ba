"""State rule table shared by the recommendation and insight engines.

Every ``StateName`` owns exactly one ``StateRule``. A rule bundles all
state-specific behaviour: the catalog predicate, the confidence bonus, the
match-reason message, the insight template and the coaching copy. Keeping
them together means a new state cannot be wired into one engine and
forgotten in the other; ``RULES`` is checked for completeness on import.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from adaptive_engine.enums import InsightType, Level, StateName, TimeOfDay
from adaptive_engine.schema import CandidateItem, Insight

Predicate = Callable[[CandidateItem], bool]

DEFAULT_MATCH_REASON = "Good fit for current state"
DEFAULT_SUGGESTED_ACTIONS = ("Take a moment to assess your current priorities",)


class RuleTableError(RuntimeError):
    """Raised when the rule table does not cover every productivity state."""


@dataclass(frozen=True)
class ScoreBonus:
    label: str
    applies: Predicate
    amount: float


@dataclass(frozen=True)
class MatchRule:
    applies: Predicate
    message: str


@dataclass(frozen=True)
class StateRule:
    keep: Predicate
    bonus: Optional[ScoreBonus] = None
    reason: Optional[MatchRule] = None
    insight: Optional[Insight] = None
    suggested_actions: tuple[str, ...] = DEFAULT_SUGGESTED_ACTIONS
    tips: tuple[str, ...] = ()


def _keep_all(item: CandidateItem) -> bool:
    return True


def _focus_work(item: CandidateItem) -> bool:
    return item.focus_required == Level.HIGH or item.priority == Level.HIGH


def _needs_high_focus(item: CandidateItem) -> bool:
    return item.focus_required == Level.HIGH


def _needs_high_energy(item: CandidateItem) -> bool:
    return item.energy_required == Level.HIGH


def _needs_low_energy(item: CandidateItem) -> bool:
    return item.energy_required == Level.LOW


def _needs_low_focus(item: CandidateItem) -> bool:
    return item.focus_required == Level.LOW


_FOCUS_INSIGHT = Insight(
    id="focus-boost",
    type=InsightType.TIP,
    title="You're in the zone!",
    description="Consider tackling your most challenging task while you're focused.",
    action="View difficult tasks",
    action_url="/tasks?filter=high-effort",
    priority=3,
    relevance_score=0.9,
)

RULES: Mapping[StateName, StateRule] = MappingProxyType(
    {
        StateName.FOCUSED: StateRule(
            keep=_focus_work,
            bonus=ScoreBonus("focused_high_focus", _needs_high_focus, 0.3),
            reason=MatchRule(_needs_high_focus, "Perfect for your current focus level"),
            insight=_FOCUS_INSIGHT,
            suggested_actions=(
                "Continue your current flow - you're in the zone!",
                "Set a timer to maintain awareness of time",
                "Prepare your next task to maintain momentum",
            ),
        ),
        StateName.DEEP_WORK: StateRule(
            keep=_focus_work,
            insight=_FOCUS_INSIGHT,
            suggested_actions=(
                "Perfect time for your most challenging tasks",
                "Turn off notifications to protect this state",
                "Work in 90-minute blocks with short breaks",
            ),
            tips=("Protect this precious state", "This is when your best work happens"),
        ),
        StateName.ENERGIZED: StateRule(
            keep=lambda item: item.energy_required == Level.HIGH or item.category == "Creative",
            bonus=ScoreBonus("energized_high_energy", _needs_high_energy, 0.3),
            reason=MatchRule(_needs_high_energy, "Great match for your high energy"),
            insight=Insight(
                id="high-energy",
                type=InsightType.RECOMMENDATION,
                title="High energy time!",
                description="Great opportunity for creative work or starting new projects.",
                action="View creative tasks",
                action_url="/tasks?category=creative",
                priority=3,
                relevance_score=0.9,
            ),
            suggested_actions=(
                "Channel this energy into important tasks",
                "Start with your most challenging work",
                "Set clear goals to make the most of this state",
            ),
        ),
        StateName.TIRED: StateRule(
            keep=lambda item: item.energy_required == Level.LOW and item.estimated_duration <= 30,
            bonus=ScoreBonus("tired_low_energy", _needs_low_energy, 0.4),
            reason=MatchRule(_needs_low_energy, "Light task for your current energy"),
            insight=Insight(
                id="energy-boost",
                type=InsightType.TIP,
                title="Low energy detected",
                description="Perfect time for admin tasks or consider taking a short break.",
                action="View easy tasks",
                action_url="/tasks?filter=low-effort",
                priority=2,
                relevance_score=0.8,
            ),
            suggested_actions=(
                "Take a proper break or light walk",
                "Switch to administrative or planning tasks",
                "Consider ending work if it's late in the day",
            ),
            tips=("Rest is productive too", "Your brain needs recovery time"),
        ),
        StateName.DISTRACTED: StateRule(
            keep=lambda item: item.focus_required == Level.LOW and item.estimated_duration <= 25,
            reason=MatchRule(_needs_low_focus, "Easy task while you refocus"),
            insight=Insight(
                id="distraction-help",
                type=InsightType.RECOMMENDATION,
                title="Need to refocus?",
                description="Try a 5-minute breathing exercise or switch to a simpler task.",
                action="Start breathing exercise",
                priority=3,
                relevance_score=0.8,
            ),
            suggested_actions=(
                "Try a 5-minute meditation to reset focus",
                "Clear your workspace and close unnecessary tabs",
                "Switch to lighter tasks until focus returns",
            ),
        ),
        StateName.OVERWHELMED: StateRule(
            keep=lambda item: item.priority != Level.LOW and item.estimated_duration <= 20,
            bonus=ScoreBonus("overwhelmed_short_task", lambda item: item.estimated_duration <= 20, 0.2),
            insight=Insight(
                id="overwhelm-help",
                type=InsightType.RECOMMENDATION,
                title="Feeling overwhelmed?",
                description="Break down tasks into smaller steps or focus on just one priority.",
                action="View priority tasks",
                action_url="/tasks?filter=priority",
                priority=3,
                relevance_score=0.9,
            ),
            suggested_actions=(
                "Take a 10-minute break to reset",
                "Review and prioritize your task list",
                "Consider postponing non-urgent items",
            ),
            tips=("It's okay to feel this way sometimes", "Small steps lead to big progress"),
        ),
        StateName.PLANNING: StateRule(
            keep=lambda item: item.category == "Planning" or "goals" in item.tags,
            reason=MatchRule(lambda item: item.category == "Planning", "Aligns with your planning mindset"),
            insight=Insight(
                id="planning-mode",
                type=InsightType.TIP,
                title="Planning mindset active",
                description="Use this time to organize your week or set new goals.",
                action="Open calendar",
                action_url="/calendar",
                priority=2,
                relevance_score=0.8,
            ),
            suggested_actions=(
                "Great time to organize tasks for tomorrow",
                "Review your goals and priorities",
                "Prepare your workspace for focused work",
            ),
        ),
        StateName.NEUTRAL: StateRule(keep=_keep_all),
    }
)

TIME_OF_DAY_TIPS: Mapping[TimeOfDay, tuple[str, ...]] = MappingProxyType(
    {
        TimeOfDay.MORNING: ("Morning energy is perfect for creative work", "Tackle your hardest task first"),
        TimeOfDay.AFTERNOON: ("Great time for meetings and collaboration", "Use afternoon energy for implementation"),
        TimeOfDay.EVENING: ("Perfect for planning and reflection", "Prepare tomorrow's priorities"),
        TimeOfDay.NIGHT: ("Focus on light tasks and wrap-up", "Avoid stimulating activities before sleep"),
    }
)


def check_rule_table(rules: Mapping[StateName, StateRule]) -> None:
    """Raise ``RuleTableError`` unless every state has a rule."""

    missing = [state.value for state in StateName if state not in rules]
    if missing:
        raise RuleTableError(f"Rule table is missing states: {missing}")
    unused = [str(key) for key in rules if not isinstance(key, StateName)]
    if unused:
        raise RuleTableError(f"Rule table has unknown keys: {unused}")


check_rule_table(RULES)


def rule_for(state) -> StateRule:
    """Look up the rule for a state name; unknown names get the neutral rule."""

    name = StateName.parse(state, StateName.NEUTRAL)
    return RULES[name]


def suggested_actions(state) -> list[str]:
    return list(rule_for(state).suggested_actions)


def contextual_tips(state, time_of_day) -> list[str]:
    """Time-of-day tips followed by any state-specific tips."""

    period = TimeOfDay.parse(time_of_day)
    time_tips = TIME_OF_DAY_TIPS.get(period, ()) if period is not None else ()
    return [*time_tips, *rule_for(state).tips]
