"""Per-candidate explanation of the recommendation decision."""

from __future__ import annotations

from adaptive_engine.recommender import hard_filter_reason, match_reason, score_candidate
from adaptive_engine.rules import rule_for
from adaptive_engine.schema import CandidateItem, ProductivityState
from adaptive_engine.thresholds import bucket


def explain_recommendation(item: CandidateItem, state) -> dict:
    """Return the filter decision and confidence breakdown for one item."""

    state = ProductivityState.coerce(state)
    if not isinstance(item, CandidateItem):
        item = CandidateItem.from_dict(item)

    rejected_by = hard_filter_reason(item, state)
    if rejected_by is None and not rule_for(state.current_state).keep(item):
        rejected_by = f"state_rule:{state.current_state.value}"

    scoring = score_candidate(item, state, return_components=True)
    components = [{"rule": name, "weight": float(weight)} for name, weight in scoring["components"].items()]
    return {
        "id": item.id,
        "state": state.current_state.value,
        "energy_bucket": bucket(state.energy_level).value,
        "focus_bucket": bucket(state.focus_level).value,
        "eligible": rejected_by is None,
        "rejected_by": rejected_by,
        "match_reason": match_reason(item, state),
        "raw_score": float(scoring["raw_score"]),
        "confidence": float(scoring["score"]),
        "components": components,
    }
