"""Shared pytest fixtures and configuration."""

from unittest.mock import MagicMock

import pytest

from pipelight.fetcher import Build


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def make_build():
    """Factory for Build snapshots with a given status."""

    def _make(status: str = "success", build_id: int = 48) -> Build:
        return Build(
            id=build_id,
            status=status,
            ref="develop",
            sha="eb94b618fb5865b26e80fdd8ae531b7a63ad851a",
            author_name="John Doe",
        )

    return _make


@pytest.fixture
def mock_panel() -> MagicMock:
    """Create a mock IndicatorPanel."""
    return MagicMock()
