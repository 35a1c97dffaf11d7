"""External service wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from issue_relay.tools.github import GitHubService
from issue_relay.tools.notion import NotionService

if TYPE_CHECKING:
    from issue_relay.models.config import Settings


@dataclass(frozen=True)
class Services:
    """Service handles shared by request handlers."""

    github: GitHubService
    notion: NotionService


def build_services(settings: Settings) -> Services:
    """Construct the service handles from settings.

    No network calls are made here; missing credentials surface as
    ConfigurationError on first use.
    """
    return Services(
        github=GitHubService(token=settings.github_token),
        notion=NotionService(
            api_key=settings.notion_api_key,
            database_id=settings.notion_database_id,
        ),
    )


__all__ = [
    "GitHubService",
    "NotionService",
    "Services",
    "build_services",
]
