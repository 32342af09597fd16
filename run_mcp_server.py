"""
Form Builder MCP Server Entry Point.

Usage:
    python run_mcp_server.py --transport stdio
    python run_mcp_server.py --transport sse --port 8080
"""

import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from form_builder.mcp_server.cli import main


if __name__ == "__main__":
    main()
