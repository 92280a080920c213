"""GitHub REST API access for pull request metadata."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from src.infra.errors import GitHubError

from .context import GitHubContext

SHORT_SHA_LENGTH = 7


class GitHubClient:
    """Read-only GitHub client for the current workflow run.

    Resolves the pull request a run belongs to and the latest commit on
    it. Request failures are not caught: they propagate as
    requests exceptions and abort the calling flow.
    """

    def __init__(
        self,
        token: str,
        context: GitHubContext,
        *,
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the client.

        Args:
            token: Token with read access to pull requests
            context: Current run context
            session: Optional requests session (a new one is created if omitted)
            timeout: Per-request timeout in seconds
        """
        self.context = context
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            }
        )

    def _get(self, path: str) -> Any:
        url = f"{self.context.api_url}/{path.lstrip('/')}"
        logger.debug(f"GET {url}")
        response = self._session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_current_pull_request_id(self) -> str:
        """Return the number of the pull request this run belongs to.

        Looks at the event payload first (pull_request events and comments
        on pull requests), then asks the API which pull requests contain
        the triggering commit.

        Raises:
            GitHubError: If no pull request is associated with the run
        """
        event = self.context.load_event()

        pull_request = event.get("pull_request")
        if isinstance(pull_request, dict) and pull_request.get("number"):
            return str(pull_request["number"])

        issue = event.get("issue")
        if isinstance(issue, dict) and issue.get("pull_request") and issue.get("number"):
            return str(issue["number"])

        if self.context.repository and self.context.sha:
            pulls = self._get(
                f"repos/{self.context.repository}/commits/{self.context.sha}/pulls"
            )
            if pulls:
                logger.info(
                    f"Resolved pull request #{pulls[0]['number']} from commit "
                    f"{self.context.sha[:SHORT_SHA_LENGTH]}"
                )
                return str(pulls[0]["number"])

        raise GitHubError(
            "Could not determine the current pull request",
            details=(
                f"Event '{self.context.event_name or 'unknown'}' carries no pull "
                "request and no open pull request contains the triggering commit.\n"
                "Run this step from a pull_request workflow."
            ),
        )

    def get_latest_commit_short_sha(self, pull_request_id: str | None = None) -> str:
        """Return the short SHA of the head commit of a pull request.

        Args:
            pull_request_id: Pull request number (resolved from the run if omitted)

        Returns:
            First seven characters of the head commit SHA
        """
        pr = pull_request_id or self.get_current_pull_request_id()
        pull = self._get(f"repos/{self.context.repository}/pulls/{pr}")
        sha: str = pull["head"]["sha"]
        return sha[:SHORT_SHA_LENGTH]
