"""Data models for the Status Tracker."""

from __future__ import annotations

from dataclasses import dataclass

from pipelight.fetcher.models import BuildStatus


@dataclass
class ProjectState:
    """In-memory build state of one tracked project.

    Attributes:
        current_status: Raw status of the latest build. Starts as "success",
            an optimistic prior rather than a fetched fact.
        previous_status: Last terminal status seen before the current one.
            Never set from a pending status.
        in_error_state: True while the latest fetch failed.
    """

    current_status: str = BuildStatus.SUCCESS.value
    previous_status: str | None = None
    in_error_state: bool = False

    @property
    def current(self) -> BuildStatus:
        return BuildStatus.from_value(self.current_status)

    @property
    def previous(self) -> BuildStatus | None:
        if self.previous_status is None:
            return None
        return BuildStatus.from_value(self.previous_status)
