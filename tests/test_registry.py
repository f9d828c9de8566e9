"""
Unit tests for the tool registry and dispatcher.
"""

from unittest.mock import AsyncMock

import pytest

from notion_mcp.base import (
    InvalidArgumentsError,
    MCPTool,
    NotFoundError,
    UnauthorizedError,
    UnknownToolError,
)
from notion_mcp.registry import ToolRegistry, build_registry
from notion_mcp.tools import ReadPageTool, SearchPagesTool


@pytest.fixture
def registry(mock_client) -> ToolRegistry:
    return build_registry(mock_client)


class TestCatalog:
    """Catalog and dispatch table stay in lockstep."""

    def test_declaration_order(self, registry):
        names = [tool.name for tool in registry.list_tools()]
        assert names == ["search_pages", "read_page"]

    def test_every_listed_tool_has_one_handler(self, registry):
        listed = registry.list_tools()
        names = [tool.name for tool in listed]

        assert len(names) == len(set(names))
        for tool in listed:
            assert registry.get_tool(tool.name).handler is not None

    def test_catalog_is_stable(self, registry):
        first = [tool.to_descriptor() for tool in registry.list_tools()]
        second = [tool.to_descriptor() for tool in registry.list_tools()]
        assert first == second

    def test_input_schemas(self, registry):
        schemas = {tool.name: tool.input_schema for tool in registry.list_tools()}

        assert schemas["search_pages"] == {
            "type": "object",
            "properties": {"query": {"type": "string", "description": "Search query"}},
            "required": ["query"],
        }
        assert schemas["read_page"]["required"] == ["pageId"]
        assert schemas["read_page"]["properties"]["pageId"]["type"] == "string"

    def test_duplicate_names_rejected(self, mock_client):
        with pytest.raises(ValueError, match="search_pages"):
            ToolRegistry([SearchPagesTool(mock_client), SearchPagesTool(mock_client)])

    def test_get_unknown_tool_returns_none(self, registry):
        assert registry.get_tool("nonexistent_tool") is None
        assert "nonexistent_tool" not in registry
        assert len(registry) == 2


class TestInvoke:
    """Tests for ToolRegistry.invoke."""

    @pytest.mark.asyncio
    async def test_search_pages_passes_results_through(self, registry, mock_client, sample_pages):
        result = await registry.invoke("search_pages", {"query": "roadmap"})

        mock_client.search.assert_awaited_once_with("roadmap")
        assert result is sample_pages

    @pytest.mark.asyncio
    async def test_read_page_returns_document(self, registry, mock_client, sample_page):
        result = await registry.invoke("read_page", {"pageId": "abc123"})

        mock_client.retrieve.assert_awaited_once_with("abc123")
        assert result is sample_page

    @pytest.mark.asyncio
    async def test_repeated_reads_are_equivalent(self, registry):
        first = await registry.invoke("read_page", {"pageId": "abc123"})
        second = await registry.invoke("read_page", {"pageId": "abc123"})
        assert first == second

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry):
        with pytest.raises(UnknownToolError) as exc_info:
            await registry.invoke("nonexistent_tool", {})

        assert exc_info.value.tool_name == "nonexistent_tool"
        assert "nonexistent_tool" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, None, {"query": ""}, {"query": "   "}, {"query": 42}])
    async def test_search_requires_query(self, registry, mock_client, arguments):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await registry.invoke("search_pages", arguments)

        assert exc_info.value.tool_name == "search_pages"
        mock_client.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_read_requires_page_id(self, registry, mock_client):
        with pytest.raises(InvalidArgumentsError, match="pageId"):
            await registry.invoke("read_page", {"page_id": "abc123"})

        mock_client.retrieve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_mapping_arguments_rejected(self, registry):
        with pytest.raises(InvalidArgumentsError):
            await registry.invoke("read_page", ["abc123"])

    @pytest.mark.asyncio
    async def test_store_errors_propagate_unchanged(self, registry, mock_client):
        error = NotFoundError("Notion API error (404): missing", status_code=404)
        mock_client.retrieve.side_effect = error

        with pytest.raises(NotFoundError) as exc_info:
            await registry.invoke("read_page", {"pageId": "missing"})

        assert exc_info.value is error


class TestExecute:
    """Tests for the envelope-returning ToolRegistry.execute."""

    @pytest.mark.asyncio
    async def test_success_envelope(self, registry, sample_pages):
        result = await registry.execute("search_pages", {"query": "roadmap"})

        assert result == {"success": True, "tool": "search_pages", "result": sample_pages}

    @pytest.mark.asyncio
    async def test_unknown_tool_envelope(self, registry):
        result = await registry.execute("nonexistent_tool", {})

        assert result["success"] is False
        assert result["error_type"] == "unknown_tool"

    @pytest.mark.asyncio
    async def test_invalid_arguments_envelope(self, registry):
        result = await registry.execute("search_pages", {})

        assert result["success"] is False
        assert result["error_type"] == "invalid_arguments"
        assert "query" in result["error"]

    @pytest.mark.asyncio
    async def test_unauthorized_envelope(self, registry, mock_client):
        mock_client.search.side_effect = UnauthorizedError(
            "Notion API error (401): API token is invalid.", status_code=401
        )

        result = await registry.execute("search_pages", {"query": "roadmap"})

        assert result["success"] is False
        assert result["error_type"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_not_swallowed(self, registry, mock_client):
        mock_client.search.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await registry.execute("search_pages", {"query": "roadmap"})


def test_custom_tool_registration():
    class EchoTool(MCPTool):
        @property
        def name(self) -> str:
            return "echo"

        @property
        def description(self) -> str:
            return "Echo"

        async def execute(self, **kwargs):
            return kwargs

    registry = ToolRegistry([EchoTool(), ReadPageTool(AsyncMock())])

    assert registry.list_tool_names() == ["echo", "read_page"]
    assert registry.get_tool("echo").input_schema == {"type": "object", "properties": {}}


@pytest.mark.asyncio
async def test_error_envelope_carries_details(mock_client):
    registry = build_registry(mock_client)
    mock_client.retrieve.side_effect = NotFoundError(
        "Notion API error (404): missing", status_code=404, code="object_not_found"
    )

    invalid = await registry.execute("read_page", {})
    missing = await registry.execute("read_page", {"pageId": "missing"})

    assert invalid["details"] == {"parameter": "pageId"}
    assert missing["details"] == {"status_code": 404, "code": "object_not_found"}
