"""YouTrack REST client wrapper (bearer auth + $top/$skip pagination)."""

from __future__ import annotations

import json
import logging
import re
from typing import Any
from urllib.parse import urlsplit

import requests

from .config import DEFAULT_ISSUE_FIELDS, DEFAULT_PAGE_SIZE, PROJECT_FIELDS
from .errors import ConfigurationError, YouTrackAPIError

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_ABSOLUTE_RE = re.compile(r"^https?:", re.IGNORECASE)


def normalize_base_url(host_or_url: str | None) -> str:
    """Turn a bare host or full URL into the REST API base URL.

    >>> normalize_base_url("example.youtrack.cloud")
    'https://example.youtrack.cloud/api'
    >>> normalize_base_url("http://tracker.local/youtrack/")
    'http://tracker.local/youtrack/api'
    """
    if not host_or_url or not isinstance(host_or_url, str):
        raise ValueError("YouTrack host or base URL must be provided")
    normalized = host_or_url.strip()
    if not normalized:
        raise ValueError("YouTrack host or base URL must be provided")
    if not _SCHEME_RE.match(normalized):
        normalized = f"https://{normalized}"
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    if not normalized.endswith("/api"):
        normalized = f"{normalized}/api"
    return normalized


def _to_search_params(search_params: dict[str, Any] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in (search_params or {}).items():
        if value is None or value == "":
            continue
        params[key] = str(value)
    return params


class YouTrackAPI:
    def __init__(
        self,
        host_or_url: str,
        token: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        if not token:
            raise ConfigurationError("YouTrack permanent token must be provided")
        self.base_url = normalize_base_url(host_or_url)
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def build_url(self, endpoint: str) -> str:
        if not endpoint:
            raise ValueError("Endpoint is required")
        if _ABSOLUTE_RE.match(endpoint):
            return endpoint
        suffix = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        return f"{self.base_url}{suffix}"

    def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: Any = None,
        search_params: dict[str, Any] | None = None,
    ) -> Any:
        url = self.build_url(endpoint)
        path = urlsplit(url).path
        params = _to_search_params(search_params)
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        logger.debug("%s %s params=%s", method, url, params)
        resp = self.session.request(
            method,
            url,
            params=params or None,
            headers=self.build_headers(headers),
            data=body,
            timeout=self.timeout,
        )
        if not 200 <= resp.status_code < 300:
            try:
                details = (resp.text or "").strip()
            except (UnicodeDecodeError, ValueError):
                details = ""
            raise YouTrackAPIError(resp.status_code, resp.reason or "", path, details)
        if resp.status_code == 204:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise YouTrackAPIError(resp.status_code, "Invalid JSON body", path) from exc

    # ------------------ Listing endpoints ------------------
    def get_projects(
        self,
        *,
        fields: str = PROJECT_FIELDS,
        top: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Any:
        return self.request(
            "/admin/projects",
            search_params={"fields": fields, "$top": top, "$skip": skip},
        )

    def get_issues(
        self,
        *,
        fields: str = DEFAULT_ISSUE_FIELDS,
        query: str | None = None,
        top: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Any:
        return self.request(
            "/issues",
            search_params={"fields": fields, "query": query, "$top": top, "$skip": skip},
        )

    def get_all_projects(self, fields: str = PROJECT_FIELDS) -> list[dict[str, Any]]:
        return self._paginate(lambda skip: self.get_projects(fields=fields, skip=skip), "projects")

    def get_all_issues(
        self,
        *,
        fields: str = DEFAULT_ISSUE_FIELDS,
        query: str | None = None,
    ) -> list[dict[str, Any]]:
        return self._paginate(lambda skip: self.get_issues(fields=fields, query=query, skip=skip), "issues")

    def _paginate(self, fetch_page, label: str) -> list[dict[str, Any]]:
        # The server reports no total; a short (or empty) page is the only end marker.
        out: list[dict[str, Any]] = []
        skip = 0
        while True:
            batch = fetch_page(skip)
            if not isinstance(batch, list) or not batch:
                break
            out.extend(batch)
            logger.debug("Fetched %s %s (skip=%s, running total=%s)", len(batch), label, skip, len(out))
            if len(batch) < DEFAULT_PAGE_SIZE:
                break
            skip += len(batch)
        return out
