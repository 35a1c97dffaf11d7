"""Unit tests for Notion wrappers."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from notion_client.errors import APIResponseError, RequestTimeoutError

from issue_relay.errors import ConfigurationError, ValidationError
from issue_relay.tools.notion import NotionService

DATABASE_ID = "0f1e2d3c4b5a69788796a5b4c3d2e1f0"


def _api_error() -> APIResponseError:
    response = httpx.Response(404, request=httpx.Request("GET", "https://api.notion.com/v1/x"))
    return APIResponseError(response, "Could not find page", "object_not_found")


class TestNotionServiceConstruction:
    """Tests for client construction."""

    def test_builds_async_client(self) -> None:
        """Test that the client is built from the API key."""
        with patch("issue_relay.tools.notion.AsyncClient") as mock_client:
            NotionService(api_key="secret_notion_test", database_id=DATABASE_ID)

        mock_client.assert_called_once_with(auth="secret_notion_test")

    def test_no_client_without_key(self) -> None:
        """Test that no client is built when the key is missing."""
        with patch("issue_relay.tools.notion.AsyncClient") as mock_client:
            NotionService(api_key=None, database_id=DATABASE_ID)

        mock_client.assert_not_called()


class TestNotionConfiguration:
    """Tests for configuration checks shared by every call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("api_key", "database_id", "missing"),
        [
            (None, DATABASE_ID, "NOTION_API_KEY"),
            ("secret_notion_test", None, "NOTION_DATABASE_ID"),
            ("", "", "NOTION_API_KEY"),
        ],
    )
    async def test_create_task_requires_config(
        self,
        mock_notion_client: MagicMock,
        api_key: str | None,
        database_id: str | None,
        missing: str,
    ) -> None:
        """Test that missing config fails before any request."""
        service = NotionService(api_key, database_id, client=mock_notion_client)

        with pytest.raises(ConfigurationError, match=missing):
            await service.create_task("title", "content")

        mock_notion_client.pages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_config_checked_before_arguments(self, mock_notion_client: MagicMock) -> None:
        """Test that configuration errors win over argument errors."""
        service = NotionService(None, DATABASE_ID, client=mock_notion_client)

        with pytest.raises(ConfigurationError):
            await service.create_task("", "")

    @pytest.mark.asyncio
    async def test_every_call_checks_config(self, mock_notion_client: MagicMock) -> None:
        """Test read operations also check configuration."""
        service = NotionService("secret_notion_test", None, client=mock_notion_client)

        with pytest.raises(ConfigurationError):
            await service.get_page("page-id")
        with pytest.raises(ConfigurationError):
            await service.get_database()
        with pytest.raises(ConfigurationError):
            await service.query_database()

        mock_notion_client.pages.retrieve.assert_not_called()
        mock_notion_client.databases.retrieve.assert_not_called()
        mock_notion_client.databases.query.assert_not_called()


class TestCreateTask:
    """Tests for create_task."""

    @pytest.mark.asyncio
    async def test_create_task_success(self, mock_notion_client: MagicMock) -> None:
        """Test the page request shape."""
        mock_notion_client.pages.create.return_value = {"id": "page-1", "object": "page"}
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        result = await service.create_task("Fix login", "Users cannot log in")

        assert result["id"] == "page-1"
        kwargs = mock_notion_client.pages.create.call_args.kwargs
        assert kwargs["parent"] == {"database_id": DATABASE_ID}
        assert kwargs["properties"] == {
            "Title": {"title": [{"text": {"content": "Fix login"}}]},
        }
        assert kwargs["children"] == [
            {
                "object": "block",
                "type": "paragraph",
                "paragraph": {
                    "rich_text": [{"type": "text", "text": {"content": "Users cannot log in"}}],
                },
            },
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("title", "content"), [("", "content"), ("title", "")])
    async def test_missing_arguments(
        self,
        mock_notion_client: MagicMock,
        title: str,
        content: str,
    ) -> None:
        """Test that title and content are required."""
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        with pytest.raises(ValidationError, match="Title and content"):
            await service.create_task(title, content)

        mock_notion_client.pages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_reraised(self, mock_notion_client: MagicMock) -> None:
        """Test that API errors propagate unchanged."""
        error = _api_error()
        mock_notion_client.pages.create.side_effect = error
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        with pytest.raises(APIResponseError) as exc_info:
            await service.create_task("title", "content")

        assert exc_info.value is error


class TestReadOperations:
    """Tests for page and database reads."""

    @pytest.mark.asyncio
    async def test_get_page(self, mock_notion_client: MagicMock) -> None:
        """Test retrieving a page."""
        mock_notion_client.pages.retrieve.return_value = {"id": "page-1"}
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        assert await service.get_page("page-1") == {"id": "page-1"}
        mock_notion_client.pages.retrieve.assert_awaited_once_with(page_id="page-1")

    @pytest.mark.asyncio
    async def test_get_page_requires_id(self, mock_notion_client: MagicMock) -> None:
        """Test that a page id is required."""
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        with pytest.raises(ValidationError, match="Page ID"):
            await service.get_page("")

    @pytest.mark.asyncio
    async def test_get_page_timeout_reraised(self, mock_notion_client: MagicMock) -> None:
        """Test that timeouts propagate unchanged."""
        mock_notion_client.pages.retrieve.side_effect = RequestTimeoutError()
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        with pytest.raises(RequestTimeoutError):
            await service.get_page("page-1")

    @pytest.mark.asyncio
    async def test_get_database(self, mock_notion_client: MagicMock) -> None:
        """Test retrieving the configured database."""
        mock_notion_client.databases.retrieve.return_value = {"id": DATABASE_ID}
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        assert await service.get_database() == {"id": DATABASE_ID}
        mock_notion_client.databases.retrieve.assert_awaited_once_with(database_id=DATABASE_ID)

    @pytest.mark.asyncio
    async def test_query_without_arguments(self, mock_notion_client: MagicMock) -> None:
        """Test that unset filter and sorts are not sent."""
        mock_notion_client.databases.query.return_value = {"results": []}
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        assert await service.query_database() == {"results": []}
        mock_notion_client.databases.query.assert_awaited_once_with(database_id=DATABASE_ID)

    @pytest.mark.asyncio
    async def test_query_with_filter_and_sorts(self, mock_notion_client: MagicMock) -> None:
        """Test that filter and sorts are forwarded."""
        mock_notion_client.databases.query.return_value = {"results": [{"id": "page-1"}]}
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)
        query_filter = {"property": "Title", "title": {"contains": "login"}}
        sorts = [{"timestamp": "created_time", "direction": "descending"}]

        await service.query_database(filter=query_filter, sorts=sorts)

        mock_notion_client.databases.query.assert_awaited_once_with(
            database_id=DATABASE_ID,
            filter=query_filter,
            sorts=sorts,
        )

    @pytest.mark.asyncio
    async def test_query_error_reraised(self, mock_notion_client: MagicMock) -> None:
        """Test that query errors propagate unchanged."""
        mock_notion_client.databases.query.side_effect = _api_error()
        service = NotionService("secret_notion_test", DATABASE_ID, client=mock_notion_client)

        with pytest.raises(APIResponseError):
            await service.query_database()
