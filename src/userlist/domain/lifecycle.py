"""Load lifecycle for a user session.

IDLE -> LOADING -> (LOADED | LOAD_FAILED), and back to LOADING on refresh.
A refresh issued while a load is in flight is allowed (LOADING -> LOADING);
the session discards whichever completion is no longer the latest.
"""

from __future__ import annotations

from enum import StrEnum


class LoadState(StrEnum):
    """Where the session is in fetching the remote listing."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


LOAD_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["loading"],
    "loading": ["loading", "loaded", "load_failed"],
    "loaded": ["loading"],
    "load_failed": ["loading"],
}


def can_transition(current: str, target: str) -> bool:
    """Check whether moving from *current* to *target* is allowed."""
    return target in LOAD_TRANSITIONS.get(current, [])
