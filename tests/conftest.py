import pytest

from adaptive_engine.schema import CandidateItem


def make_item(item_id, **overrides):
    values = {
        "id": item_id,
        "title": f"Task {item_id}",
        "description": "",
        "estimated_duration": 20,
        "energy_required": "medium",
        "focus_required": "medium",
        "category": "General",
        "priority": "medium",
        "tags": (),
    }
    values.update(overrides)
    return CandidateItem(**values)


@pytest.fixture
def item_factory():
    return make_item
