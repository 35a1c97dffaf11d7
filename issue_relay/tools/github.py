"""GitHub REST wrappers used by orchestration code."""

from __future__ import annotations

import asyncio
from itertools import islice
from typing import Any

from github import Auth, Github, GithubException

from issue_relay.errors import ConfigurationError, ValidationError
from issue_relay.utils.logging import get_logger

logger = get_logger("tools.github")

ISSUE_STATES = ("open", "closed", "all")
MAX_PER_PAGE = 100


class GitHubService:
    """Issue operations against the GitHub REST API, authenticated by token."""

    def __init__(self, token: str | None, client: Github | None = None) -> None:
        """Initialize the service.

        Args:
            token: Personal access token. Calls fail with ConfigurationError
                when it is missing.
            client: Pre-built client, mainly for tests. Built from the token
                when omitted.
        """
        self._token = token
        if client is None and token:
            client = Github(auth=Auth.Token(token))
        self._client = client

    def _require_client(self) -> Github:
        """Return the client, or raise before any request is made."""
        if not self._token or self._client is None:
            raise ConfigurationError("GITHUB_TOKEN environment variable is not set")
        return self._client

    async def create_issue_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> dict[str, Any]:
        """Create a comment on an issue.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            issue_number: Issue number.
            body: Comment text.

        Returns:
            The created comment as returned by the API.

        Raises:
            ValidationError: If any argument is missing.
            ConfigurationError: If no token is configured.
            GithubException: If the API call fails.
        """
        if not owner or not repo or not issue_number or not body:
            raise ValidationError(
                "Missing required parameters: owner, repo, issue_number, and body are required"
            )

        client = self._require_client()

        logger.info(
            "Creating issue comment",
            extra={"repository": f"{owner}/{repo}", "issue_number": issue_number},
        )

        def _create() -> dict[str, Any]:
            issue = client.get_repo(f"{owner}/{repo}").get_issue(issue_number)
            return issue.create_comment(body).raw_data

        try:
            comment = await asyncio.to_thread(_create)
        except GithubException as e:
            logger.error(
                "Failed to create issue comment",
                extra={
                    "repository": f"{owner}/{repo}",
                    "issue_number": issue_number,
                    "status": e.status,
                },
            )
            raise

        logger.info("Issue comment created", extra={"comment_id": comment.get("id")})
        return comment

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        """Fetch a single issue.

        Raises:
            ConfigurationError: If no token is configured.
            GithubException: If the API call fails.
        """
        client = self._require_client()

        def _get() -> dict[str, Any]:
            return client.get_repo(f"{owner}/{repo}").get_issue(issue_number).raw_data

        try:
            return await asyncio.to_thread(_get)
        except GithubException as e:
            logger.error(
                "Failed to get issue",
                extra={
                    "repository": f"{owner}/{repo}",
                    "issue_number": issue_number,
                    "status": e.status,
                },
            )
            raise

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        per_page: int = 30,
    ) -> list[dict[str, Any]]:
        """List issues of a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: One of ``open``, ``closed`` or ``all``.
            per_page: Maximum number of issues to return (1-100).

        Returns:
            Up to ``per_page`` issues, newest first.

        Raises:
            ConfigurationError: If no token is configured.
            ValidationError: If ``state`` or ``per_page`` is out of range.
            GithubException: If the API call fails.
        """
        client = self._require_client()

        if state not in ISSUE_STATES:
            raise ValidationError(f"state must be one of {', '.join(ISSUE_STATES)}, got {state!r}")
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValidationError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}")

        def _list() -> list[dict[str, Any]]:
            issues = client.get_repo(f"{owner}/{repo}").get_issues(state=state)
            return [issue.raw_data for issue in islice(issues, per_page)]

        try:
            issues = await asyncio.to_thread(_list)
        except GithubException as e:
            logger.error(
                "Failed to list issues",
                extra={"repository": f"{owner}/{repo}", "state": state, "status": e.status},
            )
            raise

        logger.info(
            "Listed issues",
            extra={"repository": f"{owner}/{repo}", "state": state, "issue_count": len(issues)},
        )
        return issues
