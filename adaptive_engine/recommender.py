"""State-aware task recommendation pipeline."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from adaptive_engine.enums import Level, StateName
from adaptive_engine.rules import DEFAULT_MATCH_REASON, rule_for
from adaptive_engine.schema import CandidateItem, ProductivityState, Recommendation
from adaptive_engine.thresholds import bucket, clamp_unit

logger = logging.getLogger(__name__)

DEFAULT_CAP = 3
BASE_CONFIDENCE = 0.5
PRIORITY_BONUS = 0.2
PRIORITY_FOCUS_GATE = 60.0


def as_catalog(catalog: Optional[Iterable]) -> tuple[CandidateItem, ...]:
    if not catalog:
        return ()
    return tuple(item if isinstance(item, CandidateItem) else CandidateItem.from_dict(item) for item in catalog)


def hard_filter_reason(item: CandidateItem, state: ProductivityState) -> Optional[str]:
    """Return why ``item`` is excluded regardless of state rules, or None."""

    energy = bucket(state.energy_level)
    focus = bucket(state.focus_level)

    if energy == Level.LOW and item.energy_required == Level.HIGH:
        return "energy_too_low"
    if energy == Level.MEDIUM and item.energy_required == Level.HIGH and state.current_state == StateName.TIRED:
        return "tired_high_energy"
    if focus == Level.LOW and item.focus_required == Level.HIGH:
        return "focus_too_low"
    if state.current_state == StateName.DISTRACTED and item.focus_required != Level.LOW:
        return "distracted_needs_focus"
    return None


def is_eligible(item: CandidateItem, state: ProductivityState) -> bool:
    if hard_filter_reason(item, state) is not None:
        return False
    return rule_for(state.current_state).keep(item)


def score_candidate(item: CandidateItem, state: ProductivityState, return_components: bool = False):
    """Compute the bounded match confidence for a candidate."""

    components = {"base": BASE_CONFIDENCE}

    bonus = rule_for(state.current_state).bonus
    if bonus is not None and bonus.applies(item):
        components[bonus.label] = bonus.amount

    if item.priority == Level.HIGH and state.focus_level > PRIORITY_FOCUS_GATE:
        components["high_priority_focus"] = PRIORITY_BONUS

    raw = sum(components.values())
    bounded = clamp_unit(raw)

    if return_components:
        return {"score": bounded, "raw_score": raw, "components": components}
    return bounded


def match_reason(item: CandidateItem, state: ProductivityState) -> str:
    reason = rule_for(state.current_state).reason
    if reason is not None and reason.applies(item):
        return reason.message
    return DEFAULT_MATCH_REASON


def recommend(state, catalog, cap: int = DEFAULT_CAP) -> list[Recommendation]:
    """Return up to ``cap`` catalog items ranked by match confidence.

    Ties keep their catalog order. An empty or fully filtered catalog yields
    an empty list.
    """

    state = ProductivityState.coerce(state)
    items = as_catalog(catalog)
    if cap <= 0 or not items:
        return []

    survivors = [item for item in items if is_eligible(item, state)]
    if not survivors:
        logger.debug("No candidates matched state %s (%d in catalog)", state.current_state.value, len(items))
        return []

    scored = [
        Recommendation.from_item(item, match_reason(item, state), score_candidate(item, state))
        for item in survivors
    ]
    scores = np.asarray([rec.confidence for rec in scored], dtype=float)
    order = np.argsort(-scores, kind="stable")

    ranked = [scored[index] for index in order[:cap]]
    logger.debug(
        "Recommended %d of %d candidates for state %s",
        len(ranked),
        len(items),
        state.current_state.value,
    )
    return ranked
