import random

import pandas as pd
import pytest

from youtrack_app.analytics.aggregations.category import aggregate_by_project, category_counts, stats_from_frame
from youtrack_app.core.service import build_stats, tally_issues
from youtrack_app.visual.cards import DEMO_STATS_KEY, generate_demo_stats, is_demo, session_demo_stats
from youtrack_app.visual.charts import category_breakdown_chart


def _sample_df():
    rows = [
        ("DEMO", "resolved"),
        ("DEMO", "resolved"),
        ("DEMO", "in_progress"),
        ("DEMO", "open"),
        ("SUP", "open"),
        ("SUP", "other"),
    ]
    return pd.DataFrame([{"id": f"2-{i}", "project": p, "category": c} for i, (p, c) in enumerate(rows)])


def test_aggregate_by_project():
    out = aggregate_by_project(_sample_df())
    assert list(out["project"]) == ["DEMO", "SUP"]
    demo = out.set_index("project").loc["DEMO"]
    assert demo["resolved"] == 2
    assert demo["total"] == 4
    assert demo["completion_rate"] == pytest.approx(50.0)
    sup = out.set_index("project").loc["SUP"]
    assert sup["other"] == 1
    assert sup["completion_rate"] == 0


def test_aggregate_by_project_empty():
    out = aggregate_by_project(pd.DataFrame(columns=["project", "category"]))
    assert out.empty
    assert "completion_rate" in out.columns


def test_stats_from_frame_matches_tally():
    states = ["Done", "Closed", "Testing", "Backlog", None]
    issues = [{"state": s} if s else {} for s in states]
    df = pd.DataFrame(
        [{"project": "DEMO", "category": c} for c in ("resolved", "resolved", "in_progress", "open", "other")]
    )
    assert category_counts(df) == tally_issues(issues)
    assert stats_from_frame(df, ["DEMO"]) == build_stats(tally_issues(issues), ["DEMO"])


def test_demo_stats_are_labelled_and_consistent():
    for seed in range(20):
        stats = generate_demo_stats(random.Random(seed))
        assert is_demo(stats)
        assert 120 <= stats.total_issues < 180
        assert stats.active_issues == stats.total_issues - stats.resolved_issues
        assert stats.open_issues + stats.in_progress_issues == stats.active_issues
        assert 0 <= stats.completion_rate <= 100


def test_category_chart():
    breakdown = aggregate_by_project(_sample_df())
    assert category_breakdown_chart(breakdown) is not None
    assert category_breakdown_chart(breakdown.iloc[0:0]) is None


def test_session_demo_stats_stable_across_reruns():
    state = {}
    first = session_demo_stats(state, random.Random(1))
    second = session_demo_stats(state, random.Random(2))
    assert second is first
    assert is_demo(first)
    state.pop(DEMO_STATS_KEY)
    assert session_demo_stats(state, random.Random(2)) == generate_demo_stats(random.Random(2))
