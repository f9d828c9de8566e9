"""
MCP Tool Registry

Single Source of Truth (SSOT) for the tool catalog and the name -> handler
dispatch table. Both are derived from the same tool objects, so a listed
tool always has exactly one implementation.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import MCPTool, MCPToolError, ToolDefinition, UnknownToolError
from .notion_client import NotionClient
from .tools import ReadPageTool, SearchPagesTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Immutable catalog of tools, in declaration order."""

    def __init__(self, tools: Iterable[MCPTool]):
        registry: Dict[str, ToolDefinition] = {}
        for tool in tools:
            definition = tool.to_definition()
            if definition.name in registry:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            registry[definition.name] = definition
            logger.debug(f"Registered tool: {definition.name}")
        self._tools = registry

    def list_tools(self) -> List[ToolDefinition]:
        """Return the full catalog. Same content and order on every call."""
        logger.info("Tools requested by client")
        return list(self._tools.values())

    def list_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """
        Get a specific tool by name.
        Returns None if tool not found.
        """
        return self._tools.get(name)

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Dispatch a call by tool name and return the tool result unchanged.

        Raises UnknownToolError for names outside the catalog and
        InvalidArgumentsError when required arguments are missing. Errors
        from the Notion client propagate as they are.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return await tool.handler(arguments)

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a tool by name with given arguments.
        Returns standardized response format instead of raising.
        """
        try:
            result = await self.invoke(name, arguments)
            return {
                "success": True,
                "tool": name,
                "result": result
            }
        except MCPToolError as e:
            logger.error(f"{e.error_type} error in {name}: {e.message}")
            return {
                "success": False,
                "tool": name,
                "error": e.message,
                "error_type": e.error_type,
                "details": e.details
            }

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry(client: NotionClient) -> ToolRegistry:
    """Create the registry of all Notion tools bound to client."""
    return ToolRegistry([
        SearchPagesTool(client),
        ReadPageTool(client),
    ])
