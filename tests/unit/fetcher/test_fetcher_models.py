"""Unit tests for fetcher data models."""

import pytest

from pipelight.fetcher import Build, BuildStatus


@pytest.mark.unit
class TestBuildStatus:
    """Tests for BuildStatus mapping."""

    def test_terminal_values(self) -> None:
        """success and failed map to themselves."""
        assert BuildStatus.from_value("success") is BuildStatus.SUCCESS
        assert BuildStatus.from_value("failed") is BuildStatus.FAILED

    @pytest.mark.parametrize(
        "value", ["pending", "running", "created", "manual", "canceled", "skipped", "", None]
    )
    def test_everything_else_is_pending(self, value: str | None) -> None:
        """Unrecognized statuses collapse into PENDING."""
        assert BuildStatus.from_value(value) is BuildStatus.PENDING

    def test_is_terminal(self) -> None:
        """Only success and failed are terminal."""
        assert BuildStatus.SUCCESS.is_terminal
        assert BuildStatus.FAILED.is_terminal
        assert not BuildStatus.PENDING.is_terminal


@pytest.mark.unit
class TestBuild:
    """Tests for Build parsing."""

    def test_from_dict(self) -> None:
        """GitLab detail record is parsed."""
        build = Build.from_dict(
            {
                "id": 48,
                "status": "running",
                "ref": "develop",
                "sha": "eb94b618fb5865b26e80fdd8ae531b7a63ad851a",
                "user": {"name": "John Doe"},
            }
        )

        assert build.id == 48
        assert build.status == "running"
        assert build.build_status is BuildStatus.PENDING
        assert build.author_name == "John Doe"
        assert build.short_sha == "eb94b618"
        assert build.web_url is None

    def test_is_immutable(self) -> None:
        """Builds cannot be modified after fetching."""
        build = Build(id=1, status="success", ref="main", sha="abc", author_name="x")

        with pytest.raises(AttributeError):
            build.status = "failed"  # type: ignore[misc]
