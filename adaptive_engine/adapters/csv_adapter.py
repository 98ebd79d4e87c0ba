"""CSV adapter for candidate catalogs."""

from __future__ import annotations

import csv
import re

from adaptive_engine.schema import CandidateItem, validate_catalog

_REQUIRED_FIELDS = ("id", "title", "estimated_duration")
_TAG_SPLIT = re.compile(r"[|;]")


def _parse_row(row: dict, row_number: int) -> CandidateItem:
    missing = [field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    tags_raw = row.get("tags") or ""
    tags = [tag.strip() for tag in _TAG_SPLIT.split(tags_raw) if tag.strip()]

    try:
        return CandidateItem(
            id=row["id"].strip(),
            title=row["title"].strip(),
            description=(row.get("description") or "").strip(),
            estimated_duration=row["estimated_duration"].strip(),
            energy_required=(row.get("energy_required") or "medium").strip(),
            focus_required=(row.get("focus_required") or "medium").strip(),
            category=(row.get("category") or "").strip(),
            priority=(row.get("priority") or "medium").strip(),
            tags=tags,
        )
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc


def parse(file_path: str) -> tuple[CandidateItem, ...]:
    """Parse a CSV file into a validated catalog snapshot."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return ()

        items = [_parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]
    return validate_catalog(items)
