"""Metric cards for the stats widget, plus clearly-labelled demo numbers."""

from __future__ import annotations

import random
from collections.abc import MutableMapping

import streamlit as st

from youtrack_app.core.models import StatsResult

DEMO_MARKER = "Demo data (YouTrack statistics unavailable)"
DEMO_STATS_KEY = "demo_stats"


def generate_demo_stats(rng: random.Random | None = None) -> StatsResult:
    """Placeholder numbers for when live stats cannot be loaded.

    The result always carries ``DEMO_MARKER`` in ``error`` so callers can't
    mistake it for a live aggregate.
    """
    rng = rng or random.Random()
    total = 120 + rng.randrange(60)
    resolved = int(total * (0.55 + rng.random() * 0.25))
    active = total - resolved
    open_count = int(active * (0.4 + rng.random() * 0.3))
    return StatsResult(
        total_issues=total,
        resolved_issues=resolved,
        active_issues=active,
        open_issues=open_count,
        in_progress_issues=max(0, active - open_count),
        completion_rate=round(resolved / total * 100, 1),
        error=DEMO_MARKER,
    )


def is_demo(stats: StatsResult) -> bool:
    return stats.error == DEMO_MARKER


def session_demo_stats(state: MutableMapping, rng: random.Random | None = None) -> StatsResult:
    """Demo stats kept in ``state`` so reruns show the same numbers until cleared."""
    stats = state.get(DEMO_STATS_KEY)
    if stats is None:
        stats = generate_demo_stats(rng)
        state[DEMO_STATS_KEY] = stats
    return stats


def render_stat_cards(stats: StatsResult) -> None:
    top = st.columns(3)
    top[0].metric("Total Issues", stats.total_issues)
    top[1].metric("Resolved", stats.resolved_issues)
    top[2].metric("Completion Rate", f"{stats.completion_rate:.1f}%")
    bottom = st.columns(3)
    bottom[0].metric("Active", stats.active_issues)
    bottom[1].metric("Open", stats.open_issues)
    bottom[2].metric("In Progress", stats.in_progress_issues)
    st.progress(min(max(stats.completion_rate / 100, 0.0), 1.0))
