"""
MCP Server module for the form builder.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from form_builder.mcp_server.server import create_mcp_server, run_mcp_server
from form_builder.mcp_server.tools import get_mcp_tools, handle_tool_call

__all__ = [
    "create_mcp_server",
    "run_mcp_server",
    "get_mcp_tools",
    "handle_tool_call",
]
