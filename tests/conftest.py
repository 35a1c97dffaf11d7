"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from issue_relay.models.config import Settings
from issue_relay.webhook.validators import compute_signature

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_env() -> Generator[None]:
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def webhook_secret() -> str:
    """Webhook secret for testing."""
    return "test-webhook-secret"


@pytest.fixture
def mock_env(webhook_secret: str) -> dict[str, str]:
    """Standard environment variables for testing."""
    return {
        "GITHUB_WEBHOOK_SECRET": webhook_secret,
        "GITHUB_TOKEN": "ghp_testtoken",
        "NOTION_API_KEY": "secret_notion_test",
        "NOTION_DATABASE_ID": "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def set_mock_env(mock_env: dict[str, str]) -> Generator[None]:
    """Set mock environment variables for a test."""
    for key, value in mock_env.items():
        os.environ[key] = value
    yield


@pytest.fixture
def settings(mock_env: dict[str, str]) -> Settings:
    """Fully populated settings."""
    return Settings.from_env(mock_env)


@pytest.fixture
def sample_issue() -> dict[str, Any]:
    """Sample GitHub issue object."""
    return {
        "title": "Bug: Login not working",
        "body": "Users cannot log in with valid credentials",
        "number": 123,
        "state": "open",
        "user": {"login": "john_doe"},
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-16T08:00:00Z",
    }


@pytest.fixture
def sample_issue_event_payload(sample_issue: dict[str, Any]) -> dict[str, Any]:
    """Sample GitHub `issues` webhook payload."""
    return {
        "action": "opened",
        "issue": sample_issue,
        "repository": {"id": 987654321, "full_name": "owner/repo"},
        "sender": {"login": "john_doe", "id": 12345},
    }


@pytest.fixture
def sample_ping_payload() -> dict[str, Any]:
    """Sample GitHub ping webhook payload."""
    return {
        "zen": "Responsive is better than fast.",
        "hook_id": 123456,
        "hook": {"type": "Repository", "id": 789012},
    }


@pytest.fixture
def mock_github_client() -> MagicMock:
    """Mock PyGithub client."""
    client = MagicMock()
    client.get_repo.return_value = MagicMock()
    return client


@pytest.fixture
def mock_notion_client() -> MagicMock:
    """Mock notion-client AsyncClient."""
    client = MagicMock()
    client.pages.create = AsyncMock()
    client.pages.retrieve = AsyncMock()
    client.databases.retrieve = AsyncMock()
    client.databases.query = AsyncMock()
    return client


@pytest.fixture
def webhook_signature(webhook_secret: str) -> str:
    """Signature of the body ``{"test": "payload"}`` under the test secret."""
    return compute_signature(b'{"test": "payload"}', webhook_secret)
