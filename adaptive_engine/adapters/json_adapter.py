"""JSON adapters for catalogs, analytic insights and states."""

from __future__ import annotations

import json

from adaptive_engine.schema import AnalyticInsight, CandidateItem, ProductivityState, validate_catalog

_REQUIRED_FIELDS = ("id", "title")


def _load(file_path: str):
    with open(file_path, encoding="utf-8") as handle:
        return json.load(handle)


def _load_list(file_path: str) -> list:
    payload = _load(file_path)
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")
    return payload


def _parse_item(item: dict, index: int) -> CandidateItem:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = [field for field in _REQUIRED_FIELDS if not item.get(field)]
    if item.get("estimatedDuration", item.get("estimated_duration")) is None:
        missing.append("estimatedDuration")
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        return CandidateItem.from_dict(item)
    except ValueError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def parse(file_path: str) -> tuple[CandidateItem, ...]:
    """Parse a JSON list of candidate objects into a validated catalog."""

    items = [_parse_item(item, i) for i, item in enumerate(_load_list(file_path), start=1)]
    return validate_catalog(items)


def parse_analytics(file_path: str) -> list[AnalyticInsight]:
    """Parse a JSON list of analytic insight objects."""

    insights = []
    for index, item in enumerate(_load_list(file_path), start=1):
        if not isinstance(item, dict) or not item.get("id"):
            raise ValueError(f"Item {index}: analytic insight requires an id")
        insights.append(AnalyticInsight.from_dict(item))
    return insights


def parse_state(file_path: str) -> ProductivityState:
    """Parse a JSON object into a productivity state snapshot."""

    payload = _load(file_path)
    if not isinstance(payload, dict):
        raise ValueError("JSON state payload must be an object")
    return ProductivityState.from_dict(payload)
