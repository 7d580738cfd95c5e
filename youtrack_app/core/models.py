"""Domain data models for YouTrack projects, issue states, and aggregate stats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

StateSource = Literal["state", "custom_field"]


@dataclass(slots=True)
class ProjectModel:
    id: str | None
    name: str | None
    short_name: str | None

    @property
    def label(self) -> str:
        return self.short_name or self.name or self.id or ""

    @property
    def query_key(self) -> str:
        return self.short_name or self.id or ""


@dataclass(slots=True, frozen=True)
class StateValue:
    """Workflow state name plus where on the issue record it was found."""

    source: StateSource
    name: str


@dataclass(slots=True)
class IssueModel:
    id: str | None
    id_readable: str | None
    project: str | None
    state: StateValue | None
    category: str


@dataclass(slots=True)
class StatsResult:
    total_issues: int = 0
    resolved_issues: int = 0
    active_issues: int = 0
    open_issues: int = 0
    in_progress_issues: int = 0
    completion_rate: float = 0.0
    projects: list[str] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "totalIssues": self.total_issues,
            "resolvedIssues": self.resolved_issues,
            "activeIssues": self.active_issues,
            "openIssues": self.open_issues,
            "inProgressIssues": self.in_progress_issues,
            "completionRate": self.completion_rate,
        }
        if self.projects is not None:
            out["projects"] = list(self.projects)
        if self.error:
            out["error"] = self.error
        return out
