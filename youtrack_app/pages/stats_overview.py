"""Issue stats page.

Fetches issues for every accessible project (or a single one), renders the
aggregate as metric cards and shows a per-project category breakdown. Demo
numbers are only shown when live stats fail AND the user opted in.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pandas as pd
import pytz
import requests
import streamlit as st

from youtrack_app.analytics.aggregations.category import aggregate_by_project, stats_from_frame
from youtrack_app.app import register_page
from youtrack_app.core.config import TIMEZONE
from youtrack_app.core.errors import YouTrackError
from youtrack_app.core.service import StatsService
from youtrack_app.visual.cards import DEMO_STATS_KEY, render_stat_cards, session_demo_stats
from youtrack_app.visual.charts import category_breakdown_chart
from youtrack_app.visual.progress import ProgressReporter

logger = logging.getLogger(__name__)


@register_page("Issue Stats")
def stats_page():
    st.title("YouTrack Issue Stats")
    st.caption("Resolved, in-progress and open issues across your YouTrack projects.")
    service: StatsService | None = st.session_state.get("stats_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    project = st.text_input("Project (id, name or short name; blank for all)", value="").strip() or None
    allow_demo = st.checkbox("Show demo data when YouTrack is unavailable", value=False)
    refresh = st.button("Refresh", type="primary")

    if refresh:
        st.session_state.pop("stats_error", None)
        st.session_state.pop(DEMO_STATS_KEY, None)
        reporter = ProgressReporter(f"Fetching issues for {project or 'all projects'}")
        try:
            scoped = service.scoped_projects(project, progress=reporter.callback)
            issues_df = service.breakdown_for(scoped, progress=reporter.callback)
            stats = stats_from_frame(issues_df, [p.label for p in scoped])
            st.session_state["stats_result"] = stats
            st.session_state["stats_breakdown"] = aggregate_by_project(issues_df)
            st.session_state["stats_refreshed"] = datetime.now(pytz.timezone(TIMEZONE))
            reporter.complete(f"Loaded {stats.total_issues} issue(s) from {len(scoped)} project(s).")
        except (YouTrackError, requests.RequestException) as exc:
            logger.warning("Live stats unavailable: %s", exc)
            reporter.error(f"Failed to fetch YouTrack stats: {exc}")
            st.session_state["stats_error"] = str(exc)
            st.session_state.pop("stats_result", None)
            st.session_state.pop("stats_breakdown", None)

    error = st.session_state.get("stats_error")
    stats = st.session_state.get("stats_result")
    if error and stats is None:
        if not allow_demo:
            st.info("Live statistics are unavailable. Fix the connection and press Refresh.")
            return
        st.warning("Showing DEMO data: these numbers are randomly generated, not from YouTrack.")
        render_stat_cards(session_demo_stats(st.session_state))
        return
    if stats is None:
        st.info("No stats loaded yet. Press Refresh.")
        return

    refreshed = st.session_state.get("stats_refreshed")
    processed = ", ".join(stats.projects or [])
    st.success(f"Live YouTrack data loaded. Projects processed: {processed or '(none)'}")
    if refreshed is not None:
        st.caption(f"Last refreshed {refreshed.strftime('%Y-%m-%d %H:%M:%S %Z')}")
    render_stat_cards(stats)

    breakdown: pd.DataFrame = st.session_state.get("stats_breakdown", pd.DataFrame())
    if breakdown.empty:
        return
    st.markdown("---")
    st.subheader("By project")
    chart = category_breakdown_chart(breakdown)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)
    display_df = breakdown.copy()
    display_df["completion_rate"] = display_df["completion_rate"].round(1)
    st.dataframe(display_df, hide_index=True)
    csv = display_df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download Breakdown CSV",
        data=csv,
        file_name="youtrack_stats_by_project.csv",
        mime="text/csv",
    )
