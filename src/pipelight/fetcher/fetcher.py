"""BuildFetcher - Fetches the latest pipeline of a branch from the GitLab API."""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import quote

import httpx

from pipelight.fetcher.exceptions import (
    NetworkError,
    PipelineNotFoundError,
    ServerError,
)
from pipelight.fetcher.models import Build
from pipelight.logging import get_logger, sanitize_for_log, truncate_output

logger = get_logger("fetcher")

BASE_URL = "https://gitlab.com/api/v4"

# Transient transport failures worth another attempt. TLS handshake failures
# surface as httpx.ConnectError, which is a NetworkError subclass.
RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_DELAY = 5.0


class BuildFetcher:
    """Resolves "latest pipeline for a branch" into a full Build record.

    Two requests per attempt: the pipeline list for the branch (newest
    first), then the detail record of the first pipeline on that ref.
    """

    def __init__(
        self,
        project_id: str,
        api_token: str,
        branch: str = "develop",
        base_url: str = BASE_URL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        """Initialize Build Fetcher.

        Args:
            project_id: GitLab project path ("group/project") or numeric ID
            api_token: GitLab private token sent on every request
            branch: Branch whose pipelines are tracked
            base_url: GitLab API base URL (for testing/self-hosted)
            max_attempts: Total attempts, including the first, on network errors
            retry_delay: Seconds to wait between attempts
        """
        self.project_id = project_id
        self.api_token = api_token
        self.branch = branch
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the GitLab API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"PRIVATE-TOKEN": self.api_token},
                timeout=30.0,
            )
        return self._client

    @property
    def pipelines_path(self) -> str:
        """API path of the project's pipeline collection."""
        return f"/projects/{quote(self.project_id, safe='')}/pipelines"

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def latest_build(self) -> Build:
        """Fetch the most recent pipeline of the tracked branch.

        Network failures are retried up to ``max_attempts`` times with a
        fixed delay; each retry repeats the whole list + detail sequence.

        Returns:
            The latest Build on the branch.

        Raises:
            ServerError: If GitLab answers with a non-2xx status
            NetworkError: If every attempt failed at the transport level
            PipelineNotFoundError: If no pipeline exists for the branch
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._fetch_latest()
            except RETRY_EXCEPTIONS as e:
                if attempt >= self.max_attempts:
                    logger.error(
                        "Giving up on %s after %d attempts: %s", self.project_id, attempt, e
                    )
                    raise NetworkError(
                        f"Network error after {attempt} attempts: {e!r}", attempts=attempt
                    ) from e
                logger.warning(
                    "Attempt %d/%d for %s failed (%r), retrying in %ss",
                    attempt,
                    self.max_attempts,
                    self.project_id,
                    e,
                    self.retry_delay,
                )
                time.sleep(self.retry_delay)

    def _fetch_latest(self) -> Build:
        """Run one list + detail request sequence."""
        logger.info("Fetching pipelines for %s (%s) ...", self.project_id, self.branch)

        pipelines = self._get_json(self.pipelines_path, params={"ref": self.branch})
        if not isinstance(pipelines, list) or not all(isinstance(p, dict) for p in pipelines):
            body = truncate_output(repr(pipelines), 200)
            raise ServerError(f"Unexpected pipeline list from {self.pipelines_path}: {body}")

        # Pipelines come back sorted newest first
        latest = next((p for p in pipelines if p.get("ref") == self.branch), None)
        if latest is None:
            raise PipelineNotFoundError(
                f"No pipeline found for branch '{self.branch}' in {self.project_id}"
            )
        if "id" not in latest:
            raise ServerError(f"Pipeline summary without id: {latest!r}")

        detail_path = f"{self.pipelines_path}/{latest['id']}"
        detail = self._get_json(detail_path)
        if not isinstance(detail, dict):
            body = truncate_output(repr(detail), 200)
            raise ServerError(f"Unexpected pipeline detail from {detail_path}: {body}")
        try:
            build = Build.from_dict(detail)
        except (KeyError, TypeError, AttributeError) as e:
            raise ServerError(f"Malformed pipeline detail from {detail_path}: {e!r}") from e
        logger.debug("Last build on %s: %r", self.branch, build)
        return build

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a path and decode its JSON body.

        Raises:
            ServerError: On a non-2xx status or undecodable body
        """
        response = self.client.get(path, params=params)
        logger.debug("GET %s -> %s", path, response.status_code)

        if not 200 <= response.status_code < 300:
            body = sanitize_for_log(truncate_output(response.text))
            raise ServerError(
                f"{response.reason_phrase} ({response.status_code}): {body}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                f"Invalid JSON from {path}: {truncate_output(response.text, 200)}",
                status_code=response.status_code,
            ) from e
