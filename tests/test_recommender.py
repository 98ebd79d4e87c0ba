from itertools import product

import pytest

from adaptive_engine.catalog import DEFAULT_CATALOG
from adaptive_engine.enums import Level, StateName
from adaptive_engine.recommender import hard_filter_reason, match_reason, recommend, score_candidate
from adaptive_engine.schema import ProductivityState


def ids(recommendations):
    return [rec.id for rec in recommendations]


def test_tired_user_gets_only_light_task(item_factory):
    state = ProductivityState(current_state="tired", energy_level=20, focus_level=50)
    catalog = [
        item_factory("heavy", energy_required="high", estimated_duration=20),
        item_factory("light", energy_required="low", estimated_duration=20),
    ]
    result = recommend(state, catalog)
    assert ids(result) == ["light"]
    assert result[0].confidence >= 0.9 - 1e-9
    assert result[0].match_reason == "Light task for your current energy"


def test_distracted_user_keeps_only_low_focus_short_task(item_factory):
    state = ProductivityState(current_state="distracted", focus_level=30)
    catalog = [
        item_factory("deep", focus_required="high"),
        item_factory("easy", focus_required="low", estimated_duration=15),
    ]
    result = recommend(state, catalog)
    assert ids(result) == ["easy"]
    assert result[0].match_reason == "Easy task while you refocus"


def test_empty_catalog_returns_empty_list():
    state = ProductivityState(current_state="focused", energy_level=80, focus_level=80)
    assert recommend(state, []) == []
    assert recommend(state, None) == []


def test_equal_confidence_keeps_catalog_order(item_factory):
    state = ProductivityState(current_state="neutral", energy_level=50, focus_level=50)
    catalog = [item_factory(f"t{i}") for i in range(5)]
    result = recommend(state, catalog, cap=5)
    assert ids(result) == ["t0", "t1", "t2", "t3", "t4"]
    assert {rec.confidence for rec in result} == {0.5}


def test_higher_confidence_overtakes_catalog_order(item_factory):
    state = ProductivityState(current_state="neutral", energy_level=50, focus_level=80)
    catalog = [item_factory("plain"), item_factory("urgent", priority="high"), item_factory("other")]
    assert ids(recommend(state, catalog)) == ["urgent", "plain", "other"]


def test_cap_truncates_output(item_factory):
    state = ProductivityState()
    catalog = [item_factory(f"t{i}") for i in range(6)]
    assert len(recommend(state, catalog)) == 3
    assert len(recommend(state, catalog, cap=1)) == 1
    assert recommend(state, catalog, cap=0) == []


def test_default_catalog_per_state():
    focused = ProductivityState(current_state="focused", energy_level=80, focus_level=80)
    assert ids(recommend(focused, DEFAULT_CATALOG)) == ["task-2", "task-6"]
    assert recommend(focused, DEFAULT_CATALOG)[0].confidence == 1.0

    tired = ProductivityState(current_state="tired", energy_level=20, focus_level=50)
    assert ids(recommend(tired, DEFAULT_CATALOG)) == ["task-1", "task-3", "task-5"]

    distracted = ProductivityState(current_state="distracted", energy_level=65, focus_level=30)
    assert ids(recommend(distracted, DEFAULT_CATALOG)) == ["task-3", "task-5"]

    overwhelmed = ProductivityState(current_state="overwhelmed", energy_level=50, focus_level=65)
    result = recommend(overwhelmed, DEFAULT_CATALOG)
    assert ids(result) == ["task-1"]
    assert result[0].confidence == pytest.approx(0.7)

    energized = ProductivityState(current_state="energized", energy_level=80, focus_level=65)
    result = recommend(energized, DEFAULT_CATALOG)
    assert ids(result) == ["task-2", "task-4"]
    assert [rec.confidence for rec in result] == [1.0, pytest.approx(0.8)]

    planning = ProductivityState(current_state="planning", energy_level=50, focus_level=50)
    result = recommend(planning, DEFAULT_CATALOG)
    assert ids(result) == ["task-1"]
    assert result[0].match_reason == "Aligns with your planning mindset"


def test_output_is_deterministic_and_sorted():
    for name, energy, focus in product(StateName, (10, 55, 90), (10, 55, 90)):
        state = ProductivityState(current_state=name, energy_level=energy, focus_level=focus)
        first = recommend(state, DEFAULT_CATALOG)
        assert first == recommend(state, DEFAULT_CATALOG)
        assert len(first) <= 3
        confidences = [rec.confidence for rec in first]
        assert confidences == sorted(confidences, reverse=True)


def test_low_energy_never_surfaces_high_energy_items():
    for name, energy in product(list(StateName) + ["mystery"], (0, 20, 40)):
        state = ProductivityState(current_state=name, energy_level=energy, focus_level=90)
        for rec in recommend(state, DEFAULT_CATALOG, cap=10):
            assert rec.energy_required != Level.HIGH


def test_unknown_state_behaves_like_neutral():
    unknown = ProductivityState.from_dict({"currentState": "sleepy", "energyLevel": 60, "focusLevel": 60})
    neutral = ProductivityState(current_state="neutral", energy_level=60, focus_level=60)
    assert recommend(unknown, DEFAULT_CATALOG) == recommend(neutral, DEFAULT_CATALOG)


def test_recommend_accepts_plain_dicts():
    state = {"currentState": "planning", "energyLevel": 50, "focusLevel": 50}
    catalog = [item.to_dict() for item in DEFAULT_CATALOG]
    assert ids(recommend(state, catalog)) == ["task-1"]


def test_catalog_items_are_not_mutated(item_factory):
    item = item_factory("a", priority="high")
    state = ProductivityState(current_state="focused", energy_level=80, focus_level=80)
    before = item.to_dict()
    recommend(state, [item])
    assert item.to_dict() == before


def test_hard_filter_reasons(item_factory):
    heavy = item_factory("heavy", energy_required="high")
    deep = item_factory("deep", focus_required="high")
    medium_focus = item_factory("medium", focus_required="medium")

    assert hard_filter_reason(heavy, ProductivityState(energy_level=30)) == "energy_too_low"
    assert hard_filter_reason(heavy, ProductivityState(current_state="tired", energy_level=60)) == "tired_high_energy"
    assert hard_filter_reason(heavy, ProductivityState(energy_level=60)) is None
    assert hard_filter_reason(deep, ProductivityState(focus_level=30)) == "focus_too_low"
    assert (
        hard_filter_reason(medium_focus, ProductivityState(current_state="distracted", focus_level=60))
        == "distracted_needs_focus"
    )


def test_score_components(item_factory):
    item = item_factory("a", focus_required="high", priority="high")
    state = ProductivityState(current_state="focused", energy_level=80, focus_level=80)
    scored = score_candidate(item, state, return_components=True)
    assert scored["components"] == {"base": 0.5, "focused_high_focus": 0.3, "high_priority_focus": 0.2}
    assert scored["score"] == 1.0

    deep_work = ProductivityState(current_state="deep-work", energy_level=90, focus_level=50)
    assert score_candidate(item, deep_work) == 0.5

    tired = ProductivityState(current_state="tired", focus_level=90)
    light = item_factory("b", energy_required="low", priority="high")
    assert score_candidate(light, tired) == 1.0


def test_match_reason_falls_back(item_factory):
    item = item_factory("a")
    assert match_reason(item, ProductivityState(current_state="overwhelmed")) == "Good fit for current state"
    assert match_reason(item, ProductivityState(current_state="deep-work")) == "Good fit for current state"


def test_fractional_duration_is_rejected_not_truncated():
    state = ProductivityState(current_state="overwhelmed", energy_level=60, focus_level=60)
    with pytest.raises(ValueError):
        recommend(state, [{"id": "x", "title": "t", "estimatedDuration": 20.9, "priority": "high"}])

    kept = recommend(state, [{"id": "x", "title": "t", "estimatedDuration": 20, "priority": "high"}])
    assert ids(kept) == ["x"]
