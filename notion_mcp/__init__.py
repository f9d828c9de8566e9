"""
Notion MCP Server

Exposes Notion page search and page read as MCP tools.
"""

from .base import (
    InvalidArgumentsError,
    MCPTool,
    MCPToolError,
    NetworkError,
    NotFoundError,
    NotionAPIError,
    UnauthorizedError,
    UnknownToolError,
)
from .config import Settings
from .context import AppContext, build_context
from .notion_client import NotionClient
from .registry import ToolRegistry, build_registry

__all__ = [
    "AppContext",
    "InvalidArgumentsError",
    "MCPTool",
    "MCPToolError",
    "NetworkError",
    "NotFoundError",
    "NotionAPIError",
    "NotionClient",
    "Settings",
    "ToolRegistry",
    "UnauthorizedError",
    "UnknownToolError",
    "build_context",
    "build_registry",
]
