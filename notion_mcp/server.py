#!/usr/bin/env python3
"""
MCP Server Entrypoint

Exposes the Notion tools over the Model Context Protocol (stdio or SSE)
and serves a small HTTP API with a liveness endpoint and direct tool
execution.
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response
from mcp import types
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from pydantic import BaseModel

from .base import ConfigurationError
from .config import Settings
from .context import AppContext, build_context

logger = logging.getLogger(__name__)

SERVER_NAME = "notion-server"
SERVER_VERSION = "1.0.0"


# ============== Protocol Handlers ==============


def handle_list_tools(context: AppContext) -> Dict[str, List[Dict[str, Any]]]:
    """Answer an MCP tools/list request."""
    return {"tools": [tool.to_descriptor() for tool in context.registry.list_tools()]}


async def handle_call_tool(
    context: AppContext, name: str, arguments: Optional[Dict[str, Any]]
) -> Any:
    """
    Answer an MCP tools/call request.

    Failures are logged with the tool name and re-raised for the
    transport to turn into a protocol-level error.
    """
    try:
        return await context.registry.invoke(name, arguments)
    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}")
        raise


def create_mcp_server(context: AppContext) -> Server:
    """Build the MCP server bound to the given context."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=descriptor["name"],
                description=descriptor["description"],
                inputSchema=descriptor["inputSchema"],
            )
            for descriptor in handle_list_tools(context)["tools"]
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        result = await handle_call_tool(context, name, arguments)
        return [types.TextContent(
            type="text",
            text=json.dumps(result, indent=2, ensure_ascii=False)
        )]

    return server


# ============== HTTP API ==============


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolResponse(BaseModel):
    """Response from tool execution."""

    success: bool
    tool: str
    result: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


def create_app(context: AppContext) -> FastAPI:
    """Build the FastAPI application for the given context."""
    settings = context.settings
    sse = SseServerTransport("/messages/")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{settings.service_name} is running on port {settings.port}")
        for name in context.registry.list_tool_names():
            logger.info(f"  - {name}")
        yield
        await context.aclose()
        logger.info(f"{settings.service_name} shutting down")

    app = FastAPI(
        title=settings.service_name,
        description="Model Context Protocol server for Notion pages",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )

    @app.get("/api/status")
    async def status():
        return {"status": f"{settings.service_name} is running", "port": settings.port}

    @app.get("/tools")
    async def list_tools():
        return handle_list_tools(context)

    @app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
    async def execute_tool_endpoint(tool_name: str, request: ToolRequest):
        if tool_name not in context.registry:
            raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")
        result = await context.registry.execute(tool_name, request.arguments)
        return ToolResponse(**result)

    async def handle_sse(request: Request) -> Response:
        # One MCP server per SSE session
        mcp_server = create_mcp_server(context)
        async with sse.connect_sse(request.scope, request.receive, request._send) as streams:
            await mcp_server.run(
                streams[0],
                streams[1],
                mcp_server.create_initialization_options()
            )
        return Response()

    app.add_route("/sse", handle_sse, methods=["GET"])
    app.mount("/messages/", app=sse.handle_post_message)

    return app


# ============== Entrypoint ==============


async def run_stdio(context: AppContext) -> None:
    """Serve MCP over stdin/stdout."""
    server = create_mcp_server(context)
    logger.info(f"{context.settings.service_name} is running on stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        await context.aclose()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Notion MCP server")
    parser.add_argument(
        "--transport",
        choices=["http", "stdio"],
        default="http",
        help="Serve over HTTP (status endpoint + SSE) or over stdio",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: $PORT or 3000)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the MCP server."""
    args = parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    # stdout carries the MCP stream in stdio mode
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings.require_credentials()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    context = build_context(settings)

    if args.transport == "stdio":
        asyncio.run(run_stdio(context))
        return 0

    import uvicorn

    logger.info(f"Starting {settings.service_name} on {settings.host}:{settings.port}")
    uvicorn.run(create_app(context), host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
