"""Chart builders (Altair) for category breakdowns."""

from __future__ import annotations

import altair as alt
import pandas as pd

from youtrack_app.core.config import CATEGORY_LABELS, CATEGORY_ORDER

CATEGORY_COLORS = {
    "Resolved": "#2ca02c",
    "In Progress": "#1f77b4",
    "Open": "#ff7f0e",
    "Other": "#7f7f7f",
}


def category_breakdown_chart(breakdown: pd.DataFrame):
    """Stacked horizontal bar per project from ``aggregate_by_project`` output."""
    if breakdown.empty:
        return None
    long_df = breakdown.melt(
        id_vars=["project"],
        value_vars=list(CATEGORY_ORDER),
        var_name="category",
        value_name="count",
    )
    long_df["category"] = long_df["category"].map(CATEGORY_LABELS)
    long_df = long_df[long_df["count"] > 0]
    if long_df.empty:
        return None
    labels = [CATEGORY_LABELS[c] for c in CATEGORY_ORDER]
    height = max(120, 28 * breakdown["project"].nunique())
    return (
        alt.Chart(long_df)
        .mark_bar()
        .encode(
            y=alt.Y("project:N", title="Project", sort="-x"),
            x=alt.X("count:Q", title="Issues", stack="zero"),
            color=alt.Color(
                "category:N",
                title="Category",
                sort=labels,
                scale=alt.Scale(domain=labels, range=[CATEGORY_COLORS[lbl] for lbl in labels]),
            ),
            tooltip=[
                alt.Tooltip("project:N", title="Project"),
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("count:Q", title="Issues"),
            ],
        )
        .properties(height=height)
    )
