"""Error types raised while talking to YouTrack and computing stats."""

from __future__ import annotations


class YouTrackError(RuntimeError):
    """Base class for failures surfaced to the stats boundary."""


class ConfigurationError(YouTrackError):
    """Required connection settings (token, host) are missing or invalid."""


class ProjectNotFoundError(YouTrackError):
    def __init__(self, requested: str):
        self.requested = requested
        super().__init__(f'Project "{requested}" not found or not accessible with current permissions')


class YouTrackAPIError(YouTrackError):
    """Non-2xx response (or unreadable body) from the YouTrack REST API.

    ``body`` is the full response text, untruncated.
    """

    def __init__(self, status: int, reason: str, path: str, body: str = ""):
        self.status = status
        self.reason = reason
        self.path = path
        self.body = body
        detail = f"{status} {reason}".strip()
        if body:
            detail = f"{detail}: {body}"
        super().__init__(f"YouTrack API error ({path}): {detail}")
