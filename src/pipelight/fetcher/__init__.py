"""Pipeline Fetcher - Resolves the latest GitLab pipeline of a branch."""

from pipelight.fetcher.exceptions import (
    FetcherError,
    NetworkError,
    PipelineNotFoundError,
    ServerError,
)
from pipelight.fetcher.fetcher import BASE_URL, RETRY_EXCEPTIONS, BuildFetcher
from pipelight.fetcher.models import Build, BuildStatus

__all__ = [
    "BASE_URL",
    "RETRY_EXCEPTIONS",
    "Build",
    "BuildFetcher",
    "BuildStatus",
    "FetcherError",
    "NetworkError",
    "PipelineNotFoundError",
    "ServerError",
]
