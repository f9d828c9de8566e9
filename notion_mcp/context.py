"""
Application context.

Everything the front-end needs, built once at startup and passed in
explicitly instead of living in module globals.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from .config import Settings
from .notion_client import NotionClient
from .registry import ToolRegistry, build_registry


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    client: NotionClient
    registry: ToolRegistry

    async def aclose(self) -> None:
        await self.client.aclose()


def build_context(
    settings: Settings,
    client: Optional[NotionClient] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AppContext:
    """Wire settings, Notion client and tool registry together."""
    if client is None:
        client = NotionClient(
            api_key=settings.notion_api_key,
            notion_version=settings.notion_version,
            timeout=settings.request_timeout,
            http_client=http_client,
        )
    return AppContext(settings=settings, client=client, registry=build_registry(client))
