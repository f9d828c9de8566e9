"""
Notion Page Tools

search_pages: search Notion pages by text query.
read_page: read a single Notion page by id.
"""

import logging
from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter
from ..notion_client import NotionClient

logger = logging.getLogger(__name__)


class SearchPagesTool(MCPTool):
    """Search through Notion pages."""

    def __init__(self, client: NotionClient):
        self._client = client

    @property
    def name(self) -> str:
        return "search_pages"

    @property
    def description(self) -> str:
        return "Search through Notion pages"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="query",
                type="string",
                description="Search query",
                required=True
            )
        ]

    async def execute(self, query: str) -> List[Dict[str, Any]]:
        logger.info(f"Searching Notion pages: {query!r}")
        return await self._client.search(query)


class ReadPageTool(MCPTool):
    """Read a Notion page's content."""

    def __init__(self, client: NotionClient):
        self._client = client

    @property
    def name(self) -> str:
        return "read_page"

    @property
    def description(self) -> str:
        return "Read a Notion page's content"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="pageId",
                type="string",
                description="ID of the page to read",
                required=True
            )
        ]

    async def execute(self, pageId: str) -> Dict[str, Any]:
        logger.info(f"Reading Notion page: {pageId}")
        return await self._client.retrieve(pageId)


__all__ = ["SearchPagesTool", "ReadPageTool"]
