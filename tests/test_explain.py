from adaptive_engine.catalog import DEFAULT_CATALOG
from adaptive_engine.explain import explain_recommendation
from adaptive_engine.schema import ProductivityState

CATALOG = {item.id: item for item in DEFAULT_CATALOG}


def test_explains_eligible_item():
    state = ProductivityState(current_state="focused", energy_level=80, focus_level=80)
    report = explain_recommendation(CATALOG["task-2"], state)
    assert report["eligible"] is True
    assert report["rejected_by"] is None
    assert report["energy_bucket"] == "high"
    assert report["focus_bucket"] == "high"
    assert report["confidence"] == 1.0
    assert [c["rule"] for c in report["components"]] == ["base", "focused_high_focus", "high_priority_focus"]
    assert report["match_reason"] == "Perfect for your current focus level"


def test_explains_hard_filter_rejection():
    state = ProductivityState(current_state="tired", energy_level=20, focus_level=50)
    report = explain_recommendation(CATALOG["task-2"], state)
    assert report["eligible"] is False
    assert report["rejected_by"] == "energy_too_low"


def test_explains_state_rule_rejection():
    state = {"currentState": "planning", "energyLevel": 50, "focusLevel": 50}
    report = explain_recommendation(CATALOG["task-3"].to_dict(), state)
    assert report["eligible"] is False
    assert report["rejected_by"] == "state_rule:planning"
    assert report["confidence"] == 0.5
