"""Notion wrappers used by orchestration code."""

from __future__ import annotations

from typing import Any

from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from issue_relay.errors import ConfigurationError, ValidationError
from issue_relay.utils.logging import get_logger

logger = get_logger("tools.notion")

# Name of the title property expected in the task database
TITLE_PROPERTY = "Title"

NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError)


class NotionService:
    """Task pages in a single Notion database."""

    def __init__(
        self,
        api_key: str | None,
        database_id: str | None,
        client: AsyncClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            api_key: Notion integration token.
            database_id: The database tasks are created in.
            client: Pre-built client, mainly for tests. Built from the API key
                when omitted.
        """
        self._api_key = api_key
        self._database_id = database_id
        if client is None and api_key:
            client = AsyncClient(auth=api_key)
        self._client = client

    def _require_config(self) -> tuple[AsyncClient, str]:
        """Return the client and database id, or raise before any request is made."""
        if not self._api_key or self._client is None:
            raise ConfigurationError("NOTION_API_KEY environment variable is not set")
        if not self._database_id:
            raise ConfigurationError("NOTION_DATABASE_ID environment variable is not set")
        return self._client, self._database_id

    async def create_task(self, title: str, content: str) -> dict[str, Any]:
        """Create a task page in the database.

        The page gets ``title`` as its title property and ``content`` as a
        single paragraph block.

        Args:
            title: Task title.
            content: Task description.

        Returns:
            The created page object.

        Raises:
            ConfigurationError: If the API key or database id is missing.
            ValidationError: If title or content is empty.
        """
        client, database_id = self._require_config()

        if not title or not content:
            raise ValidationError("Title and content are required parameters")

        logger.info("Creating task in Notion", extra={"title": title})

        try:
            page = await client.pages.create(
                parent={"database_id": database_id},
                properties={
                    TITLE_PROPERTY: {
                        "title": [{"text": {"content": title}}],
                    },
                },
                children=[
                    {
                        "object": "block",
                        "type": "paragraph",
                        "paragraph": {
                            "rich_text": [{"type": "text", "text": {"content": content}}],
                        },
                    },
                ],
            )
        except NOTION_ERRORS as e:
            logger.error("Failed to create task in Notion", extra={"error": str(e)})
            raise

        logger.info("Task created in Notion", extra={"page_id": page.get("id")})
        return page

    async def get_page(self, page_id: str) -> dict[str, Any]:
        """Retrieve a page by id."""
        client, _ = self._require_config()

        if not page_id:
            raise ValidationError("Page ID is required")

        try:
            return await client.pages.retrieve(page_id=page_id)
        except NOTION_ERRORS as e:
            logger.error("Failed to get Notion page", extra={"page_id": page_id, "error": str(e)})
            raise

    async def get_database(self) -> dict[str, Any]:
        """Retrieve the configured database, including its property schema."""
        client, database_id = self._require_config()

        try:
            return await client.databases.retrieve(database_id=database_id)
        except NOTION_ERRORS as e:
            logger.error(
                "Failed to get Notion database",
                extra={"database_id": database_id, "error": str(e)},
            )
            raise

    async def query_database(
        self,
        filter: dict[str, Any] | None = None,  # noqa: A002
        sorts: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Query pages of the configured database.

        Args:
            filter: Notion filter object.
            sorts: Notion sort objects.

        Returns:
            The query result page.
        """
        client, database_id = self._require_config()

        # The client forwards explicit None values to the API
        params: dict[str, Any] = {"database_id": database_id}
        if filter is not None:
            params["filter"] = filter
        if sorts is not None:
            params["sorts"] = sorts

        try:
            return await client.databases.query(**params)
        except NOTION_ERRORS as e:
            logger.error(
                "Failed to query Notion database",
                extra={"database_id": database_id, "error": str(e)},
            )
            raise
