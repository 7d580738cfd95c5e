"""Central configuration: constants, workflow state tables, and connection settings."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .errors import ConfigurationError

# =============================================================================
# YouTrack Connection Settings
# =============================================================================
# Environment variables are checked in order; the first non-empty one wins.
TOKEN_ENV_VARS: Sequence[str] = ("YOUTRACK_API_TOKEN", "YOUTRACK_TOKEN")
HOST_ENV_VARS: Sequence[str] = ("YOUTRACK_API_URL", "YOUTRACK_BASE_URL", "YOUTRACK_HOST")
TIMEOUT_ENV_VAR = "YOUTRACK_TIMEOUT"

TIMEZONE = "UTC"

# =============================================================================
# Pagination and field selection
# =============================================================================
DEFAULT_PAGE_SIZE: int = 200

PROJECT_FIELDS = "id,name,shortName"
DEFAULT_ISSUE_FIELDS = "id,summary,customFields(name,value(name,presentation))"
# Only what state extraction needs; keeps the per-project payload small.
STATS_ISSUE_FIELDS = "id,idReadable,customFields(name,value(name,presentation)),state(name,presentation)"

STATE_FIELD_NAME = "State"

# =============================================================================
# Workflow State Configuration
# =============================================================================
CATEGORY_RESOLVED = "resolved"
CATEGORY_IN_PROGRESS = "in_progress"
CATEGORY_OPEN = "open"
CATEGORY_OTHER = "other"

CATEGORY_ORDER: Sequence[str] = (
    CATEGORY_RESOLVED,
    CATEGORY_IN_PROGRESS,
    CATEGORY_OPEN,
    CATEGORY_OTHER,
)

CATEGORY_LABELS: dict[str, str] = {
    CATEGORY_RESOLVED: "Resolved",
    CATEGORY_IN_PROGRESS: "In Progress",
    CATEGORY_OPEN: "Open",
    CATEGORY_OTHER: "Other",
}

# Keys must be lowercase; matching lower-cases the incoming name only.
RESOLVED_STATES: frozenset[str] = frozenset(
    {
        "done",
        "fixed",
        "closed",
        "resolved",
        "complete",
        "completed",
        "released",
        "production",
        "archived",
    }
)

IN_PROGRESS_STATES: frozenset[str] = frozenset(
    {
        "in progress",
        "in development",
        "development",
        "reviewing",
        "ready to review",
        "testing",
        "under review",
        "qa",
        "verification",
        "correction",
    }
)


@dataclass(slots=True)
class Settings:
    host: str
    token: str
    timeout: float | None = None


def _first_set(environ: Mapping[str, str], names: Sequence[str]) -> str | None:
    for name in names:
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read connection settings from environment-style variables.

    Parameters
    ----------
    environ : Mapping[str, str] or None
        Source of variables; defaults to ``os.environ``.

    Returns
    -------
    Settings
        Host, token and optional request timeout.

    Raises
    ------
    ConfigurationError
        If the token or the host is missing, or the timeout is not a number.
    """
    env = os.environ if environ is None else environ
    token = _first_set(env, TOKEN_ENV_VARS)
    host = _first_set(env, HOST_ENV_VARS)
    if not token:
        raise ConfigurationError(f"YouTrack token ({' or '.join(TOKEN_ENV_VARS)}) is required")
    if not host:
        raise ConfigurationError(f"YouTrack host ({' or '.join(HOST_ENV_VARS)}) is required")

    timeout: float | None = None
    raw_timeout = env.get(TIMEOUT_ENV_VAR)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {raw_timeout!r}") from exc
        if timeout <= 0:
            timeout = None
    return Settings(host=host, token=token, timeout=timeout)
