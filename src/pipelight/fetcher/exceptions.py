"""Custom exceptions for the Pipeline Fetcher."""

from __future__ import annotations


class FetcherError(Exception):
    """Base exception for Pipeline Fetcher errors."""


class ServerError(FetcherError):
    """The CI provider answered with a non-2xx status (or an unreadable body)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(FetcherError):
    """Transport failure that persisted through every retry attempt."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class PipelineNotFoundError(FetcherError):
    """No pipeline exists for the tracked branch."""
