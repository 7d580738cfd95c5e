"""StatsService: orchestrates project scoping, issue fetching, and aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from .config import (
    CATEGORY_IN_PROGRESS,
    CATEGORY_OPEN,
    CATEGORY_RESOLVED,
    STATS_ISSUE_FIELDS,
    Settings,
    load_settings,
)
from .errors import ProjectNotFoundError
from .mappers import extract_state, issues_to_dataframe, map_issue, map_project
from .models import ProjectModel, StatsResult
from .status import categorize_state
from .youtrack_client import YouTrackAPI

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


@dataclass(slots=True)
class CategoryCounts:
    total: int = 0
    resolved: int = 0
    in_progress: int = 0
    open: int = 0
    other: int = 0

    def add(self, other: CategoryCounts) -> None:
        self.total += other.total
        self.resolved += other.resolved
        self.in_progress += other.in_progress
        self.open += other.open
        self.other += other.other


def tally_issues(issues: Iterable[dict[str, Any]]) -> CategoryCounts:
    counts = CategoryCounts()
    for issue in issues:
        counts.total += 1
        category = categorize_state(extract_state(issue))
        if category == CATEGORY_RESOLVED:
            counts.resolved += 1
        elif category == CATEGORY_IN_PROGRESS:
            counts.in_progress += 1
        elif category == CATEGORY_OPEN:
            counts.open += 1
        else:
            counts.other += 1
    return counts


def build_stats(counts: CategoryCounts, projects: Sequence[str] | None = None) -> StatsResult:
    """Derive the dashboard aggregate from raw category counts.

    ``open_issues`` is everything neither resolved nor in progress, which
    includes issues with no readable state.
    """
    active = counts.total - counts.resolved
    completion = (counts.resolved / counts.total) * 100 if counts.total > 0 else 0.0
    return StatsResult(
        total_issues=counts.total,
        resolved_issues=counts.resolved,
        active_issues=active,
        open_issues=max(0, active - counts.in_progress),
        in_progress_issues=counts.in_progress,
        completion_rate=completion,
        projects=list(projects) if projects is not None else None,
    )


def filter_projects(projects: Sequence[ProjectModel], requested: str | None) -> list[ProjectModel]:
    if not requested or not requested.strip():
        return list(projects)
    searched = requested.strip().lower()
    filtered = [
        p for p in projects if any(v and v.lower() == searched for v in (p.id, p.name, p.short_name))
    ]
    if not filtered:
        raise ProjectNotFoundError(requested)
    return filtered


class StatsService:
    def __init__(self, api: YouTrackAPI):
        self.api = api

    def get_projects(self) -> list[ProjectModel]:
        """Fetch all projects visible to the token."""
        return [map_project(p) for p in self.api.get_all_projects() if isinstance(p, dict)]

    def fetch_project_issues(self, project: ProjectModel) -> list[dict[str, Any]]:
        query = f"project: {{{project.query_key}}}"
        return self.api.get_all_issues(query=query, fields=STATS_ISSUE_FIELDS)

    def scoped_projects(
        self,
        project: str | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[ProjectModel]:
        if progress:
            progress("Listing projects", None, None)
        scoped = filter_projects(self.get_projects(), project)
        logger.debug("Scoped %s project(s) for filter %r", len(scoped), project)
        return scoped

    # ------------------ Aggregation ------------------
    def compute_stats(
        self,
        project: str | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> StatsResult:
        scoped = self.scoped_projects(project, progress=progress)
        counts = CategoryCounts()
        for idx, current in enumerate(scoped, start=1):
            if progress:
                progress(f"Fetching issues for {current.label}", idx - 1, len(scoped))
            issues = self.fetch_project_issues(current)
            project_counts = tally_issues(issues)
            logger.info(
                "Project %s: %s issue(s), %s resolved, %s in progress",
                current.label,
                project_counts.total,
                project_counts.resolved,
                project_counts.in_progress,
            )
            counts.add(project_counts)
        if progress:
            progress("Aggregating stats", len(scoped), len(scoped))
        stats = build_stats(counts, [p.label for p in scoped])
        logger.info(
            "Computed stats over %s project(s): total=%s resolved=%s completion=%.1f%%",
            len(scoped),
            stats.total_issues,
            stats.resolved_issues,
            stats.completion_rate,
        )
        return stats

    def compute_breakdown(
        self,
        project: str | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        """Fetch issues per project and return one mapped row per issue."""
        return self.breakdown_for(self.scoped_projects(project, progress=progress), progress=progress)

    def breakdown_for(
        self,
        scoped: Sequence[ProjectModel],
        *,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        mapped = []
        for idx, current in enumerate(scoped, start=1):
            if progress:
                progress(f"Fetching issues for {current.label}", idx - 1, len(scoped))
            mapped.extend(map_issue(raw, current) for raw in self.fetch_project_issues(current))
        return issues_to_dataframe(mapped)


def get_service(settings: Settings | None = None) -> StatsService:
    settings = settings or load_settings()
    api = YouTrackAPI(settings.host, settings.token, timeout=settings.timeout)
    return StatsService(api)
