"""
Form builder MCP server entry point.

Run the MCP server with either stdio or SSE transport.

Usage:
    # stdio mode (for desktop clients)
    form-builder-mcp --transport stdio

    # SSE mode (for Docker/remote)
    form-builder-mcp --transport sse --port 8080

    # Use environment variables
    MCP_TRANSPORT=sse MCP_PORT=8080 form-builder-mcp
"""

import argparse
import asyncio
import logging
import sys

from form_builder.config import get_config
from form_builder.mcp_server.server import run_mcp_server


def build_parser() -> argparse.ArgumentParser:
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Form Builder MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Desktop client (stdio)
  form-builder-mcp --transport stdio

  # Docker/Remote (SSE)
  form-builder-mcp --transport sse --port 8080

Environment Variables:
  MCP_TRANSPORT            Transport type: stdio or sse (default: stdio)
  MCP_PORT                 Port for SSE transport (default: 8080)
  FORM_BUILDER_DATA_DIR    Directory of the saved form and submissions
  FORM_BUILDER_LOG_LEVEL   Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=config.mcp_transport,
        help=f"Transport type (default: {config.mcp_transport})",
    )

    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for SSE transport (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})",
    )

    parser.add_argument(
        "--data-dir",
        default=config.data_dir,
        help=f"Data directory (default: {config.data_dir})",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    config = get_config()
    args = build_parser().parse_args(argv)

    # stdout carries the stdio protocol, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if config.verbose_output else config.log_level,
        stream=sys.stderr,
    )
    logger = logging.getLogger("form-builder-mcp")

    logger.info(f"Transport: {args.transport}")
    if args.transport == "sse":
        logger.info(f"Host: {args.host}  Port: {args.port}")
    logger.info(f"Data directory: {args.data_dir}")

    try:
        asyncio.run(
            run_mcp_server(
                transport=args.transport,
                host=args.host,
                port=args.port,
                data_dir=args.data_dir,
            )
        )
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
