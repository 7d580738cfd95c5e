"""Category aggregations over mapped issue frames."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from youtrack_app.core.config import CATEGORY_ORDER
from youtrack_app.core.models import StatsResult
from youtrack_app.core.service import CategoryCounts, build_stats


def aggregate_by_project(df: pd.DataFrame) -> pd.DataFrame:
    """One row per project with a count column per category.

    Adds ``total`` and ``completion_rate`` (0-100, 0 for empty projects).
    """
    columns = ["project", *CATEGORY_ORDER, "total", "completion_rate"]
    if df.empty:
        return pd.DataFrame(columns=columns)
    agg = (
        pd.crosstab(df["project"], df["category"])
        .reindex(columns=list(CATEGORY_ORDER), fill_value=0)
        .astype(int)
    )
    agg["total"] = agg[list(CATEGORY_ORDER)].sum(axis=1)
    agg["completion_rate"] = (agg["resolved"] / agg["total"].where(agg["total"] > 0) * 100).fillna(0.0)
    agg = agg.sort_values(by=["total", "resolved"], ascending=False)
    agg.columns.name = None
    return agg.reset_index()[columns]


def category_counts(df: pd.DataFrame) -> CategoryCounts:
    if df.empty:
        return CategoryCounts()
    counts = df["category"].value_counts()
    return CategoryCounts(
        total=int(len(df)),
        resolved=int(counts.get("resolved", 0)),
        in_progress=int(counts.get("in_progress", 0)),
        open=int(counts.get("open", 0)),
        other=int(counts.get("other", 0)),
    )


def stats_from_frame(df: pd.DataFrame, projects: Sequence[str] | None = None) -> StatsResult:
    return build_stats(category_counts(df), projects)
