"""State categorization utilities.

Maps free-text YouTrack workflow states onto the four dashboard categories
using the lookup tables from config.py (RESOLVED_STATES, IN_PROGRESS_STATES).
Only case is folded; whitespace and locale-specific forms are left as-is.
"""

from __future__ import annotations

from .config import (
    CATEGORY_IN_PROGRESS,
    CATEGORY_OPEN,
    CATEGORY_ORDER,
    CATEGORY_OTHER,
    CATEGORY_RESOLVED,
    IN_PROGRESS_STATES,
    RESOLVED_STATES,
)

__all__ = [
    "CATEGORY_ORDER",
    "categorize_state",
    "is_in_progress_state",
    "is_resolved_state",
]


def categorize_state(value: str | None) -> str:
    """Map a state name to one of the dashboard categories.

    Parameters
    ----------
    value : str | None
        Raw state name as extracted from an issue.

    Returns
    -------
    str
        ``"resolved"``, ``"in_progress"``, ``"open"`` or ``"other"``.
        Missing or empty names are ``"other"``; any present name not found in
        the lookup tables is ``"open"``.

    Examples
    --------
    >>> categorize_state("DONE")
    'resolved'
    >>> categorize_state("Ready to Review")
    'in_progress'
    >>> categorize_state("Some Unknown State")
    'open'
    >>> categorize_state(None)
    'other'
    """
    if not value or not isinstance(value, str):
        return CATEGORY_OTHER
    text = value.lower()
    if text in RESOLVED_STATES:
        return CATEGORY_RESOLVED
    if text in IN_PROGRESS_STATES:
        return CATEGORY_IN_PROGRESS
    return CATEGORY_OPEN


def is_resolved_state(value: str | None) -> bool:
    return categorize_state(value) == CATEGORY_RESOLVED


def is_in_progress_state(value: str | None) -> bool:
    return categorize_state(value) == CATEGORY_IN_PROGRESS
