"""
Notion API Client

Thin async wrapper over the two Notion REST calls the tools need:
page search and page retrieval. No caching, no retries.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .base import (
    InvalidArgumentsError,
    NetworkError,
    NotFoundError,
    NotionAPIError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"
SEARCH_PAGE_SIZE = 10


class NotionClient:
    """
    Authenticated Notion client.

    The credential is fixed for the lifetime of the client. Pass an
    existing httpx.AsyncClient to share a connection pool or to test with
    httpx.MockTransport; otherwise one is created and owned here.
    """

    def __init__(
        self,
        api_key: str,
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = NOTION_API_BASE,
    ):
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Notion-Version": notion_version,
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Search pages matching query. Returns the first page of results only."""
        payload = {
            "query": query,
            "filter": {"property": "object", "value": "page"},
            "page_size": SEARCH_PAGE_SIZE,
        }
        data = await self._request("POST", "/search", json=payload)
        results = data.get("results", []) or []
        logger.info(f"Notion search returned {len(results)} results")
        return results

    async def retrieve(self, page_id: str) -> Dict[str, Any]:
        """Retrieve a single page object by id."""
        # One path segment, never a dot segment or a query string
        segment = quote(page_id, safe="")
        if segment in ("", ".", ".."):
            raise InvalidArgumentsError(f"Invalid page id: {page_id!r}", details={"parameter": "pageId"})
        return await self._request("GET", f"/pages/{segment}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, json: Dict = None) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.request(method, url, headers=self._headers, json=json)
        except httpx.TransportError as e:
            raise NetworkError(f"Failed to reach Notion API: {e}") from e

        if resp.status_code >= 400:
            raise self._error_from_response(resp)

        try:
            data = resp.json()
        except ValueError as e:
            raise NotionAPIError(
                f"Notion API returned invalid JSON ({resp.status_code})",
                status_code=resp.status_code,
            ) from e
        if not isinstance(data, dict):
            raise NotionAPIError(
                f"Notion API returned unexpected {type(data).__name__} body ({resp.status_code})",
                status_code=resp.status_code,
            )
        return data

    @staticmethod
    def _error_from_response(resp: httpx.Response) -> NotionAPIError:
        detail = resp.text
        code = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = body.get("message", detail)
            code = body.get("code")

        message = f"Notion API error ({resp.status_code}): {detail}"
        if resp.status_code == 401:
            return UnauthorizedError(message, status_code=401, code=code)
        if resp.status_code == 404:
            return NotFoundError(message, status_code=404, code=code)
        return NotionAPIError(message, status_code=resp.status_code, code=code)
