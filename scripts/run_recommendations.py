"""Run the recommendation and insight engines for a state snapshot."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from adaptive_engine.adapters import csv_adapter, json_adapter
from adaptive_engine.catalog import DEFAULT_CATALOG
from adaptive_engine.config import load_config
from adaptive_engine.insights import build_insights
from adaptive_engine.logger import setup_logging
from adaptive_engine.recommender import recommend
from adaptive_engine.schema import TodayStats


def _load_catalog(path: Path | None):
    if path is None:
        return DEFAULT_CATALOG
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported catalog format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Rank tasks and insights for a productivity state")
    parser.add_argument("--state", required=True, help="Path to a JSON productivity state")
    parser.add_argument("--catalog", help="Path to a CSV/JSON candidate catalog (default: built-in)")
    parser.add_argument("--analytics", help="Path to a JSON list of analytic insights")
    parser.add_argument("--tasks-completed", type=int, default=None)
    parser.add_argument("--breaks-taken", type=int, default=None)
    parser.add_argument("--cap", type=int, default=None, help="Override both output caps")
    parser.add_argument("--config", help="Path to a YAML engine config")
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(config.log_level)

    state = json_adapter.parse_state(args.state)
    catalog = _load_catalog(Path(args.catalog) if args.catalog else None)
    analytics = json_adapter.parse_analytics(args.analytics) if args.analytics else None

    stats = None
    if args.tasks_completed is not None or args.breaks_taken is not None:
        stats = TodayStats(tasks_completed=args.tasks_completed or 0, breaks_taken=args.breaks_taken or 0)

    recommendation_cap = args.cap if args.cap is not None else config.recommendation_cap
    insight_cap = args.cap if args.cap is not None else config.insight_cap

    report = {
        "state": state.to_dict(),
        "recommendations": [rec.to_dict() for rec in recommend(state, catalog, recommendation_cap)],
        "insights": [insight.to_dict() for insight in build_insights(state, analytics, stats, insight_cap)],
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
