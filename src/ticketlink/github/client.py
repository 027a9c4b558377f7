"""PullRequestClient - Reads and updates pull requests through the GitHub API."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from ticketlink.checker.models import PullRequestSnapshot
from ticketlink.github.event import PullRequestPayload
from ticketlink.github.exceptions import PullRequestError
from ticketlink.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("ticketlink.github.client")

DEFAULT_API_URL = "https://api.github.com"


class PullRequestClient:
    """Client for the pull request endpoints of the GitHub REST API."""

    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            repo: GitHub repo in "owner/repo" format
            token: GitHub token with pull request write access
            base_url: GitHub API base URL (for testing/enterprise)
            timeout: Request timeout in seconds
        """
        self.repo = repo
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> PullRequestClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def get_pull_request(self, number: int) -> PullRequestSnapshot:
        """Fetch a pull request.

        Args:
            number: The PR number

        Returns:
            Snapshot of the pull request

        Raises:
            PullRequestError: If the request fails
        """
        logger.debug("Fetching PR #%d from %s", number, self.repo)
        response = self.client.get(f"/repos/{self.repo}/pulls/{number}")

        if response.status_code != 200:
            detail = sanitize_for_log(truncate_output(response.text))
            logger.error("Failed to fetch PR #%d: %s", number, detail)
            raise PullRequestError(
                f"Failed to get PR {number}: {response.status_code} - {detail}"
            )

        return PullRequestPayload.model_validate(response.json()).to_snapshot()

    def update_pull_request(self, number: int, title: str | None, body: str) -> httpx.Response:
        """Update a pull request's title and description.

        The response is returned as is. Callers decide what a non-200 status
        means for them.

        Args:
            number: The PR number
            title: PR title, sent unchanged
            body: New PR description

        Returns:
            The API response
        """
        logger.debug("Updating description of PR #%d in %s", number, self.repo)
        payload: dict[str, str] = {"body": body}
        if title is not None:
            payload["title"] = title
        response = self.client.patch(f"/repos/{self.repo}/pulls/{number}", json=payload)

        if response.status_code != 200:
            logger.debug(
                "Update of PR #%d returned %d: %s",
                number,
                response.status_code,
                sanitize_for_log(truncate_output(response.text)),
            )
        return response
