"""
MCP Server implementation for the form builder.

Provides both stdio and SSE transport support for the Model Context Protocol.
"""

import json
import logging
from typing import Any, Literal

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from form_builder.builder import FormBuilder
from form_builder.config import get_config
from form_builder.mcp_server.tools import call_tool_async, get_mcp_tools

logger = logging.getLogger("form-builder-mcp")


def create_mcp_server(builder: FormBuilder | None = None) -> Server:
    """
    Create and configure the MCP server instance.

    Args:
        builder: Builder whose form the tools edit. If None, a builder on
            the configured data directory is created and its saved form loaded.

    Returns:
        Configured MCP Server with form builder tools registered.
    """
    if builder is None:
        builder = FormBuilder()
        builder.load_saved_form()

    server = Server("form-builder-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name=t["name"],
                description=t["description"],
                inputSchema=t["inputSchema"],
            )
            for t in get_mcp_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        logger.info(f"Tool call: {name} with args: {arguments}")
        result = await call_tool_async(builder, name, arguments)
        indent = get_config().indent_json_output
        return [TextContent(type="text", text=json.dumps(result, indent=indent))]

    return server


async def run_stdio_server(server: Server) -> None:
    """
    Run MCP server with stdio transport.

    Used for desktop clients and local subprocess communication.
    """
    logger.info("Starting MCP server with stdio transport...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def create_sse_app(server: Server, builder: FormBuilder | None = None) -> Starlette:
    """
    Create Starlette app for SSE transport.

    Used for remote/Docker deployment.
    """
    # SSE transport - messages endpoint is relative to SSE mount point
    sse_transport = SseServerTransport("/messages/")

    async def handle_sse(scope, receive, send):
        """Handle SSE connections - raw ASGI handler."""
        async with sse_transport.connect_sse(scope, receive, send) as streams:
            await server.run(
                streams[0],
                streams[1],
                server.create_initialization_options(),
            )

    async def handle_messages(scope, receive, send):
        """Handle message POST requests - raw ASGI handler."""
        await sse_transport.handle_post_message(scope, receive, send)

    async def health_check(request):
        """Health check endpoint."""
        payload: dict[str, Any] = {
            "status": "healthy",
            "service": "form-builder-mcp",
            "transport": "sse",
        }
        if builder is not None:
            payload["fields"] = len(builder.schema)
        return JSONResponse(payload)

    return Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Mount("/sse/messages", app=handle_messages),
            Mount("/sse", app=handle_sse),
        ],
    )


async def run_sse_server(
    server: Server,
    host: str = "0.0.0.0",
    port: int = 8080,
    builder: FormBuilder | None = None,
) -> None:
    """
    Run MCP server with SSE transport.

    Args:
        server: MCP Server instance
        host: Host to bind to
        port: Port to listen on
        builder: Builder reported by the health endpoint
    """
    import uvicorn

    logger.info(f"Starting MCP server with SSE transport on {host}:{port}...")

    app = create_sse_app(server, builder)
    config = uvicorn.Config(app, host=host, port=port, log_level="info")
    server_instance = uvicorn.Server(config)
    await server_instance.serve()


async def run_mcp_server(
    transport: Literal["stdio", "sse"] = "stdio",
    host: str = "0.0.0.0",
    port: int = 8080,
    data_dir: str | None = None,
) -> None:
    """
    Run MCP server with specified transport.

    Args:
        transport: Transport type - "stdio" or "sse"
        host: Host for SSE transport (default: 0.0.0.0)
        port: Port for SSE transport (default: 8080)
        data_dir: Data directory of the form (default: config.data_dir)
    """
    builder = FormBuilder(data_dir=data_dir)
    if builder.load_saved_form():
        logger.info(f"Loaded saved form with {len(builder.schema)} fields")

    server = create_mcp_server(builder)

    if transport == "stdio":
        await run_stdio_server(server)
    elif transport == "sse":
        await run_sse_server(server, host, port, builder)
    else:
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")
