"""Mapping raw YouTrack JSON into ProjectModel / IssueModel instances."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from .config import STATE_FIELD_NAME
from .models import IssueModel, ProjectModel, StateValue
from .status import categorize_state

ISSUE_COLUMNS = ("id", "id_readable", "project", "state", "state_source", "category")


def _state_from_top_level(state: Any) -> str | None:
    if isinstance(state, str):
        return state
    if isinstance(state, dict):
        return state.get("name") or state.get("presentation") or state.get("localizedName") or None
    return None


def _state_from_custom_fields(custom_fields: Any) -> str | None:
    if not isinstance(custom_fields, list):
        return None
    entry = next(
        (f for f in custom_fields if isinstance(f, dict) and f.get("name") == STATE_FIELD_NAME),
        None,
    )
    if entry is None:
        return None
    value = entry.get("value")
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return value.get("name") or value.get("presentation") or None
    return None


def extract_state_value(issue: Any) -> StateValue | None:
    """Locate an issue's workflow state.

    The top-level ``state`` field is consulted first. When it is a string or
    an object the custom-field collection is not inspected, even if ``state``
    has no usable name; any other shape falls through to the custom fields.
    Returns ``None`` when nothing matches; never raises.
    """
    if not isinstance(issue, dict):
        return None
    if issue.get("state") and isinstance(issue["state"], (str, dict)):
        name = _state_from_top_level(issue["state"])
        return StateValue("state", name) if name else None
    name = _state_from_custom_fields(issue.get("customFields"))
    return StateValue("custom_field", name) if name else None


def extract_state(issue: Any) -> str | None:
    value = extract_state_value(issue)
    return value.name if value else None


def map_project(raw: dict[str, Any]) -> ProjectModel:
    return ProjectModel(
        id=raw.get("id"),
        name=raw.get("name"),
        short_name=raw.get("shortName"),
    )


def map_issue(raw: dict[str, Any], project: ProjectModel | None = None) -> IssueModel:
    state = extract_state_value(raw)
    return IssueModel(
        id=raw.get("id"),
        id_readable=raw.get("idReadable"),
        project=project.label if project else None,
        state=state,
        category=categorize_state(state.name if state else None),
    )


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "id": i.id,
                "id_readable": i.id_readable,
                "project": i.project or "Unknown",
                "state": i.state.name if i.state else None,
                "state_source": i.state.source if i.state else None,
                "category": i.category,
            }
        )
    return pd.DataFrame(rows, columns=list(ISSUE_COLUMNS))
