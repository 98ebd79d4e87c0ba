"""Streamlit playground for adaptive-engine."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from adaptive_engine.adapters import csv_adapter, json_adapter
from adaptive_engine.catalog import DEFAULT_CATALOG
from adaptive_engine.enums import StateName, TimeOfDay
from adaptive_engine.explain import explain_recommendation
from adaptive_engine.insights import build_insights
from adaptive_engine.recommender import recommend
from adaptive_engine.rules import contextual_tips, suggested_actions
from adaptive_engine.schema import ProductivityState, TodayStats
from adaptive_engine.thresholds import bucket


def _parse_catalog_from_path(file_path: str) -> tuple:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> tuple:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_catalog_from_path(temp_path)
    finally:
        os.unlink(temp_path)


def run_engine(state_inputs: dict, catalog, cap: int = 3) -> dict[str, Any]:
    """Run both engines and return a UI-friendly result payload."""

    state = ProductivityState.from_dict(state_inputs)
    stats = TodayStats(
        tasks_completed=state_inputs.get("tasks_completed", 0),
        breaks_taken=state_inputs.get("breaks_taken", 0),
    )

    return {
        "state": state.to_dict(),
        "energy_bucket": bucket(state.energy_level).value,
        "focus_bucket": bucket(state.focus_level).value,
        "recommendations": [rec.to_dict() for rec in recommend(state, catalog, cap)],
        "insights": [insight.to_dict() for insight in build_insights(state, None, stats, cap)],
        "suggested_actions": suggested_actions(state.current_state),
        "tips": contextual_tips(state.current_state, state.time_of_day),
        "explanations": [explain_recommendation(item, state) for item in catalog],
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Adaptive Engine Playground", layout="wide")
    st.title("Adaptive Engine — Streamlit Playground")

    with st.sidebar:
        st.header("State")
        current_state = st.selectbox("Current state", options=[s.value for s in StateName], index=0)
        time_of_day = st.selectbox("Time of day", options=[t.value for t in TimeOfDay], index=0)
        energy = st.slider("Energy level", min_value=0, max_value=100, value=60)
        focus = st.slider("Focus level", min_value=0, max_value=100, value=60)
        workload = st.slider("Workload level", min_value=0, max_value=100, value=50)
        tasks_completed = st.number_input("Tasks completed today", min_value=0, value=0, step=1)
        breaks_taken = st.number_input("Breaks taken today", min_value=0, value=0, step=1)
        cap = st.number_input("Cap", min_value=1, max_value=10, value=3, step=1)
        uploaded = st.file_uploader("Upload catalog", type=["csv", "json"])
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure the state in the sidebar and click **Run engine**.")
        return

    try:
        catalog = _parse_uploaded(uploaded) if uploaded is not None else DEFAULT_CATALOG
        result = run_engine(
            {
                "currentState": current_state,
                "timeOfDay": time_of_day,
                "energyLevel": energy,
                "focusLevel": focus,
                "workloadLevel": workload,
                "tasks_completed": int(tasks_completed),
                "breaks_taken": int(breaks_taken),
            },
            catalog,
            cap=int(cap),
        )

        st.subheader("A) Buckets")
        c1, c2 = st.columns(2)
        c1.metric("Energy", result["energy_bucket"])
        c2.metric("Focus", result["focus_bucket"])

        st.subheader("B) Recommended Tasks")
        if result["recommendations"]:
            st.table(result["recommendations"])
        else:
            st.write("No matching tasks for this state.")

        st.subheader("C) Insights")
        if result["insights"]:
            st.table(result["insights"])
        else:
            st.write("No insights for this state.")

        st.subheader("D) Coaching")
        st.write(result["suggested_actions"])
        st.write(result["tips"])

        st.subheader("E) Candidate Breakdown")
        st.json(result["explanations"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
