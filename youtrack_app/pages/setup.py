"""Connection setup page: collect YouTrack host/token and initialize StatsService."""

from __future__ import annotations

import os
from collections.abc import Mapping

import streamlit as st

from youtrack_app.app import register_page
from youtrack_app.core.config import HOST_ENV_VARS, TIMEOUT_ENV_VAR, TOKEN_ENV_VARS, Settings, load_settings
from youtrack_app.core.errors import ConfigurationError
from youtrack_app.core.service import get_service


def _secrets() -> Mapping[str, str]:
    """Flatten ``[youtrack]`` and top-level secrets; empty when no secrets file exists."""
    try:
        section = dict(st.secrets.get("youtrack", {}))
        top = {k: v for k, v in st.secrets.items() if isinstance(v, str)}
    except FileNotFoundError:
        return {}
    return {**top, **section}


def resolve_settings() -> Settings:
    """Secrets take precedence over process environment variables."""
    merged = dict(os.environ)
    secrets = _secrets()
    for group in (TOKEN_ENV_VARS, HOST_ENV_VARS, (TIMEOUT_ENV_VAR,)):
        if not any(secrets.get(name) for name in group):
            continue
        for name in group:
            merged.pop(name, None)
            if secrets.get(name):
                merged[name] = str(secrets[name])
    return load_settings(merged)


def init_service(settings: Settings) -> None:
    st.session_state["youtrack_host"] = settings.host
    st.session_state["stats_service"] = get_service(settings)


@register_page("Setup / Connection")
def setup_page():
    st.title("YouTrack Connection Setup")
    st.caption("Enter a permanent token (use secrets or environment variables in production).")

    try:
        preset = resolve_settings()
    except ConfigurationError:
        preset = None

    host = st.text_input(
        "YouTrack host or base URL",
        value=st.session_state.get("youtrack_host") or (preset.host if preset else ""),
        help="e.g. example.youtrack.cloud; https:// and /api are added when missing.",
    )
    token = st.text_input(
        "Permanent token",
        type="password",
        value=preset.token if preset else "",
    )
    timeout = st.number_input(
        "Request timeout (seconds, 0 = none)",
        min_value=0.0,
        max_value=600.0,
        value=float(preset.timeout or 0.0) if preset else 0.0,
    )
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (host and token):
            st.error("Host and token are both required.")
            return
        try:
            init_service(Settings(host=host, token=token, timeout=timeout or None))
            st.success("Connection initialized.")
        except (ConfigurationError, ValueError) as e:
            st.error(f"Failed to initialize YouTrack client: {e}")

    if "stats_service" in st.session_state:
        st.info(f"StatsService ready for {st.session_state.get('youtrack_host')}.")
