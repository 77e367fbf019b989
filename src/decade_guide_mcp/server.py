"""
Decade Guide MCP - Main entry point.

This module initializes and runs the MCP server with the guidance tools
and resources. Content is loaded and validated before the server starts
accepting requests.
"""

import logging

import anyio
from mcp.server.fastmcp import FastMCP

from .core.loader import ContentError
from .core.repository import get_content_repository
from .resources import register_content_resources
from .tools import register_meaning_tools

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create the FastMCP server instance
mcp = FastMCP("decade-guide-mcp")


def load_content() -> None:
    """Build the content repository so no request waits on validation.

    Raises:
        ContentError: If the configured content is invalid.
    """
    try:
        repository = get_content_repository()
    except ContentError as e:
        logger.error(f"Content validation failed:\n{e}")
        raise

    populated = sum(1 for count in repository.coverage().values() if count)
    logger.info(
        f"Loaded {repository.total_entries} guidance entries "
        f"across {populated} decade palace(s)"
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP Server instance.
    """
    logger.info("Loading guidance content...")
    load_content()

    logger.info("Registering guidance tools...")
    register_meaning_tools(mcp)

    logger.info("Registering resources...")
    register_content_resources(mcp)

    logger.info("Decade Guide MCP initialized")
    return mcp


def run(transport: str = "stdio", host: str = "0.0.0.0", port: int = 8080) -> None:
    """Entry point for running the server.

    Args:
        transport: Transport type - "stdio" (default) or "sse" for HTTP.
        host: Host to bind to when using SSE transport.
        port: Port to bind to when using SSE transport.
    """
    create_server()

    if transport == "sse":
        import uvicorn

        logger.info(f"Starting SSE server on http://{host}:{port}")
        logger.info("SSE endpoint: /sse")
        logger.info("Messages endpoint: /messages/")
        app = mcp.sse_app()
        uvicorn.run(app, host=host, port=port)
    else:
        anyio.run(mcp.run_stdio_async)


def main():
    """CLI entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(description="Decade Guide MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport type (default: stdio)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to for SSE transport (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port for SSE transport (default: 8080)"
    )

    args = parser.parse_args()
    run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
