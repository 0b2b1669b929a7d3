"""PollScheduler - Drives status trackers on a fixed interval."""

from __future__ import annotations

import os
import signal
import threading
from typing import TYPE_CHECKING, Any

from pipelight.fetcher import BuildFetcher
from pipelight.indicator import IndicatorPanel
from pipelight.logging import get_logger
from pipelight.tracker import StatusTracker

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pipelight.config import MonitorConfig
    from pipelight.indicator import IndicatorDriver

logger = get_logger("scheduler")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class PollScheduler:
    """Polls every tracked project forever and owns the indicator driver.

    Sequential mode polls projects in configuration order and waits
    ``interval`` seconds after each one, so a round over N projects takes
    N x interval. Concurrent mode gives every project its own thread that
    polls and waits independently; the driver lock keeps their indicator
    writes apart.
    """

    def __init__(
        self,
        trackers: Sequence[StatusTracker],
        driver: IndicatorDriver,
        interval: float,
        concurrent: bool = False,
    ) -> None:
        """Initialize the Poll Scheduler.

        Args:
            trackers: Trackers in polling order. One tracker is single-project mode.
            driver: Shared indicator driver, closed on shutdown.
            interval: Seconds to wait after each poll.
            concurrent: Poll projects in parallel threads.
        """
        self.trackers = list(trackers)
        self.driver = driver
        self.interval = interval
        self.concurrent = concurrent
        self._stop = threading.Event()

    @classmethod
    def from_config(cls, config: MonitorConfig, driver: IndicatorDriver) -> PollScheduler:
        """Create one fetcher, panel and tracker per configured project."""
        trackers = [
            StatusTracker(
                name=project.project_id,
                fetcher=BuildFetcher(
                    project.project_id,
                    config.api_token,
                    branch=project.branch,
                    base_url=config.base_url,
                ),
                panel=IndicatorPanel(driver, project.outputs),
                only_red_green=config.only_red_green,
            )
            for project in config.projects
        ]
        return cls(trackers, driver, config.interval, concurrent=config.concurrent)

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run(self, max_rounds: int | None = None) -> None:
        """Poll until stopped or interrupted.

        Args:
            max_rounds: Stop after this many polls per project (None = forever).
        """
        mode = "concurrent" if self.concurrent else "sequential"
        logger.info(
            "Monitoring %d project(s) every %ss (%s)", len(self.trackers), self.interval, mode
        )
        for tracker in self.trackers:
            tracker.panel.lamp_test()

        try:
            if self.concurrent:
                self._run_concurrent(max_rounds)
            else:
                self._run_sequential(max_rounds)
        finally:
            self.shutdown()

    def stop(self) -> None:
        """Ask the polling loop(s) to finish after the current poll."""
        self._stop.set()

    def shutdown(self) -> None:
        """Turn all LEDs off and release the driver and HTTP clients."""
        self.stop()
        if not self.driver.closed:
            for tracker in self.trackers:
                tracker.panel.off()
            self.driver.close()
        for tracker in self.trackers:
            tracker.fetcher.close()
        logger.info("Monitor stopped")

    def install_signal_handlers(self) -> None:
        """Route SIGINT and SIGTERM to the urgent shutdown path."""
        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum: int, frame: Any) -> None:
        # Signal context: no logging, only direct device writes.
        self._stop.set()
        self.driver.close_urgently()
        os.write(2, b"Bye!\n")
        raise SystemExit(0)

    def _run_sequential(self, max_rounds: int | None) -> None:
        rounds = 0
        while not self.stopped:
            for tracker in self.trackers:
                self._poll(tracker)
                self._wait()
                if self.stopped:
                    return
            rounds += 1
            if max_rounds is not None and rounds >= max_rounds:
                return

    def _run_concurrent(self, max_rounds: int | None) -> None:
        threads = [
            threading.Thread(
                target=self._run_tracker,
                args=(tracker, max_rounds),
                name=f"poll-{tracker.name}",
                daemon=True,
            )
            for tracker in self.trackers
        ]
        for thread in threads:
            thread.start()
        # Join with a timeout so the main thread keeps handling signals
        for thread in threads:
            while thread.is_alive():
                thread.join(0.5)

    def _run_tracker(self, tracker: StatusTracker, max_rounds: int | None) -> None:
        rounds = 0
        while not self.stopped:
            self._poll(tracker)
            rounds += 1
            if max_rounds is not None and rounds >= max_rounds:
                return
            self._wait()

    def _poll(self, tracker: StatusTracker) -> None:
        try:
            tracker.poll_once()
        except Exception:
            logger.exception("Unexpected error while polling %s", tracker.name)

    def _wait(self) -> None:
        logger.info("Next check in %s secs", self.interval)
        self._stop.wait(self.interval)
