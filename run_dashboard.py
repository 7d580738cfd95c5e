"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``youtrack_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from youtrack_app.app import main
from youtrack_app.core.errors import ConfigurationError

st.set_page_config(layout="wide")
logger = logging.getLogger(__name__)


def _auto_init_stats_service():
    """Initialize StatsService from Streamlit secrets or environment if available."""
    if "stats_service" in st.session_state:
        return

    from youtrack_app.pages.setup import init_service, resolve_settings

    try:
        settings = resolve_settings()
    except ConfigurationError as e:
        st.sidebar.warning(f"YouTrack settings not found ({e}). Please use the Setup page.")
        return
    try:
        init_service(settings)
        st.sidebar.success("YouTrack client initialized.")
    except (ConfigurationError, ValueError) as e:
        st.sidebar.error(f"YouTrack client initialization failed: {e}")
        st.session_state.pop("stats_service", None)


PAGES_DIR = Path(__file__).parent / "youtrack_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"youtrack_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover - defensive
        logger.error("Failed importing page %s: %s", mod_name, e)

_auto_init_stats_service()

if __name__ == "__main__":
    main()
