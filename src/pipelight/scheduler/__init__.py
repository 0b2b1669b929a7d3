"""Poll Scheduler - Runs status trackers on an interval until interrupted."""

from pipelight.scheduler.scheduler import SHUTDOWN_SIGNALS, PollScheduler

__all__ = [
    "SHUTDOWN_SIGNALS",
    "PollScheduler",
]
