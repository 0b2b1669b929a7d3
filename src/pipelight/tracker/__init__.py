"""Status Tracker - Per-project build status state machine."""

from pipelight.tracker.models import ProjectState
from pipelight.tracker.tracker import STATUS_COLORS, StatusTracker

__all__ = [
    "STATUS_COLORS",
    "ProjectState",
    "StatusTracker",
]
