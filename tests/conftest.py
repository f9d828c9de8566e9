"""Shared fixtures for Notion MCP server tests."""

from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from notion_mcp.config import Settings
from notion_mcp.context import AppContext, build_context
from notion_mcp.notion_client import NotionClient


@pytest.fixture
def settings() -> Settings:
    return Settings(notion_api_key="secret_test", port=4321)


@pytest.fixture
def sample_pages() -> List[Dict[str, Any]]:
    """Search results in the order Notion returned them."""
    return [
        {"object": "page", "id": "page-2", "url": "https://www.notion.so/page-2"},
        {"object": "page", "id": "page-1", "url": "https://www.notion.so/page-1"},
    ]


@pytest.fixture
def sample_page() -> Dict[str, Any]:
    return {
        "object": "page",
        "id": "abc123",
        "properties": {
            "title": {"title": [{"type": "text", "text": {"content": "Roadmap"}}]}
        },
    }


@pytest.fixture
def mock_client(sample_pages, sample_page) -> AsyncMock:
    client = AsyncMock(spec=NotionClient)
    client.search.return_value = sample_pages
    client.retrieve.return_value = sample_page
    return client


@pytest.fixture
def context(settings, mock_client) -> AppContext:
    return build_context(settings, client=mock_client)
