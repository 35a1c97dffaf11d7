"""Rendering of received GitHub issues into log lines."""

from collections.abc import Mapping
from typing import Any

from issue_relay.utils.logging import get_logger

logger = get_logger("workflow")

BANNER = "=== GitHub Issue Received ==="
CLOSING_BANNER = "============================"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def format_issue(issue: Mapping[str, Any]) -> list[str]:
    """Render an issue as log lines.

    Title and body are always rendered, empty or not. Number, state, author
    and creation time are rendered only when truthy, so an issue number of 0
    is left out. ``updated_at`` is never rendered.

    Args:
        issue: The issue object from the webhook payload.

    Returns:
        The lines, opening and closing banners included.
    """
    lines = [
        BANNER,
        f"Title: {_text(issue.get('title'))}",
        f"Body: {_text(issue.get('body'))}",
    ]

    if issue.get("number"):
        lines.append(f"Issue #: {issue['number']}")

    if issue.get("state"):
        lines.append(f"State: {issue['state']}")

    user = issue.get("user")
    if user:
        login = user.get("login") if isinstance(user, Mapping) else None
        lines.append(f"Created by: {_text(login)}")

    if issue.get("created_at"):
        lines.append(f"Created at: {issue['created_at']}")

    lines.append(CLOSING_BANNER)
    return lines


def handle_github_issue(issue: Mapping[str, Any]) -> list[str]:
    """Log a received issue, one record per line.

    Args:
        issue: The issue object from the webhook payload.

    Returns:
        The lines that were logged.
    """
    lines = format_issue(issue)
    number = issue.get("number")
    for line in lines:
        logger.info(line, extra={"issue_number": number})
    return lines
