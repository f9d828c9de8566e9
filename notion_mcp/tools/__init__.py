"""
MCP Tools

Each tool wraps one Notion operation. Tools are constructed with the
NotionClient they call.
"""

from .pages import ReadPageTool, SearchPagesTool

__all__ = ["SearchPagesTool", "ReadPageTool"]
