"""Data models for the Pipeline Fetcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BuildStatus(str, Enum):
    """Build status as far as the indicators are concerned.

    GitLab reports many intermediate states (created, running, manual, ...);
    everything that is not a terminal value collapses into PENDING.
    """

    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"

    @classmethod
    def from_value(cls, value: str | None) -> BuildStatus:
        """Map a raw provider status string onto a BuildStatus."""
        if value == cls.SUCCESS.value:
            return cls.SUCCESS
        if value == cls.FAILED.value:
            return cls.FAILED
        return cls.PENDING

    @property
    def is_terminal(self) -> bool:
        """True for success and failed."""
        return self is not BuildStatus.PENDING


@dataclass(frozen=True)
class Build:
    """Snapshot of one pipeline run."""

    id: int
    status: str  # raw provider value, e.g. "running"
    ref: str
    sha: str
    author_name: str
    web_url: str | None = None

    @property
    def short_sha(self) -> str:
        """First 8 characters of the commit SHA."""
        return self.sha[:8]

    @property
    def build_status(self) -> BuildStatus:
        """The status collapsed onto success/failed/pending."""
        return BuildStatus.from_value(self.status)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Build:
        """Create a Build from a GitLab pipeline detail record.

        Args:
            data: Decoded JSON object from ``GET /projects/:id/pipelines/:pid``.

        Returns:
            Parsed Build.
        """
        user = data.get("user") or {}
        return cls(
            id=data["id"],
            status=str(data["status"]),
            ref=data.get("ref") or "",
            sha=data.get("sha") or "",
            author_name=user.get("name") or "unknown",
            web_url=data.get("web_url"),
        )
