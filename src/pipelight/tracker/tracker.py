"""StatusTracker - Maps build status transitions onto LEDs and buzzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipelight.fetcher import BuildStatus, FetcherError
from pipelight.indicator import Color
from pipelight.logging import get_logger
from pipelight.tracker.models import ProjectState

if TYPE_CHECKING:
    from pipelight.fetcher import Build, BuildFetcher
    from pipelight.indicator import IndicatorPanel

logger = get_logger("tracker")

STATUS_COLORS = {
    BuildStatus.SUCCESS: Color.GREEN,
    BuildStatus.FAILED: Color.RED,
    BuildStatus.PENDING: Color.YELLOW,
}

# Distinctive pattern sounded once when fetching starts failing
ERROR_BUZZ_COUNT = 3
ERROR_BUZZ_DURATION = 0.3


class StatusTracker:
    """Polls one project's latest build and drives its indicator panel.

    Transitions are judged between ``previous_status`` (the last terminal
    status) and the freshly fetched status:

    - success -> failed: single buzz
    - failed -> success: rapid "praise" buzz
    - anything involving pending, or failed -> failed: silent

    Fetch failures light yellow + red and buzz a triple pulse on the first
    failing poll only.
    """

    def __init__(
        self,
        name: str,
        fetcher: BuildFetcher,
        panel: IndicatorPanel,
        only_red_green: bool = False,
    ) -> None:
        """Initialize the Status Tracker.

        Args:
            name: Display name of the project (used in log lines).
            fetcher: BuildFetcher for this project.
            panel: IndicatorPanel bound to this project's outputs.
            only_red_green: Leave the LEDs untouched on pending builds.
        """
        self.name = name
        self.fetcher = fetcher
        self.panel = panel
        self.only_red_green = only_red_green
        self.state = ProjectState()

    @property
    def status(self) -> BuildStatus:
        """Current status collapsed onto success/failed/pending."""
        return self.state.current

    def poll_once(self) -> None:
        """Fetch the latest build and update state and indicators.

        Fetch errors are absorbed into the error indication; they never
        propagate to the caller.
        """
        try:
            build = self.fetcher.latest_build()
        except FetcherError as e:
            self._handle_fetch_error(e)
            return

        self._handle_build(build)

    def _handle_build(self, build: Build) -> None:
        state = self.state
        was_in_error = state.in_error_state
        state.in_error_state = False

        if state.current.is_terminal:
            state.previous_status = state.current_status
        state.current_status = build.status

        status = state.current
        color = STATUS_COLORS[status]
        logger.info("%s: Build status is %s", self.name, build.status)

        if status is BuildStatus.PENDING and self.only_red_green:
            if was_in_error:
                self.panel.off()
        else:
            self.panel.show(color)

        previous = state.previous
        if status is BuildStatus.FAILED:
            if previous is BuildStatus.SUCCESS:
                self.panel.buzz()
            logger.info("%s: Blame: %s by %s", self.name, build.short_sha, build.author_name)
        elif status is BuildStatus.SUCCESS and previous is BuildStatus.FAILED:
            self.panel.rapid_buzz()
            logger.info("%s: Praise: %s by %s", self.name, build.short_sha, build.author_name)

    def _handle_fetch_error(self, error: FetcherError) -> None:
        logger.error("%s: %s", self.name, error)
        self.panel.show_error()
        if not self.state.in_error_state:
            self.panel.rapid_buzz(count=ERROR_BUZZ_COUNT, duration=ERROR_BUZZ_DURATION)
        self.state.in_error_state = True
