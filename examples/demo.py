"""Demo script for adaptive-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from adaptive_engine.adapters.json_adapter import parse, parse_analytics
from adaptive_engine.enums import StateName
from adaptive_engine.insights import build_insights
from adaptive_engine.recommender import recommend
from adaptive_engine.schema import ProductivityState, TodayStats

EXAMPLES_DIR = Path(__file__).resolve().parent


def main() -> None:
    catalog = parse(str(EXAMPLES_DIR / "sample_catalog.json"))
    analytics = parse_analytics(str(EXAMPLES_DIR / "sample_analytics.json"))
    stats = TodayStats(tasks_completed=0, breaks_taken=0)

    for name in StateName:
        state = ProductivityState(current_state=name, energy_level=65, focus_level=55, time_of_day="morning")
        print(f"== {name.value}")
        for rec in recommend(state, catalog):
            print(f"  task    {rec.confidence:.2f}  {rec.title} ({rec.match_reason})")
        for insight in build_insights(state, analytics, stats):
            print(f"  insight {insight.weight:.2f}  {insight.title}")


if __name__ == "__main__":
    main()
