"""Dex MCP Server - Expose Dex contacts, notes and reminders to AI assistants."""
import sys
import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from . import tools
from .client import DexClient, build_http_client
from .config import Settings, configure_logging, load_settings
from .dispatcher import dispatch
from .errors import ConfigurationError

logger = logging.getLogger("dex-mcp")


def create_server(client: DexClient) -> Server:
    """Build the MCP server bound to one Dex client."""
    app = Server("dex-mcp")

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools for Dex."""
        return tools.get_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: Any) -> CallToolResult:
        """Handle MCP tool calls by delegating to the dispatcher."""
        return await dispatch(name, arguments, client)

    return app


# Event loop failures recorded by the loop exception handler; run() exits 1 if any
loop_failures: list[dict] = []


def install_failure_hooks(loop: asyncio.AbstractEventLoop) -> None:
    """Log and stop on exceptions that escape tool handling."""

    def excepthook(exc_type, exc, tb):
        logger.critical("Uncaught exception, shutting down", exc_info=(exc_type, exc, tb))
        sys.exit(1)

    def loop_exception_handler(loop, context):
        logger.critical(f"Unhandled exception in event loop: {context.get('message')}",
                        exc_info=context.get("exception"))
        loop_failures.append(context)
        loop.stop()

    sys.excepthook = excepthook
    loop.set_exception_handler(loop_exception_handler)


async def main(settings: Settings):
    """Run the MCP server."""
    install_failure_hooks(asyncio.get_running_loop())

    async with build_http_client(settings.api_key) as http:
        client = DexClient(http, settings.graphql_url, settings.rest_url)
        app = create_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Dex MCP server running on stdio")
            await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console entry point: load configuration, then serve on stdio."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        sys.exit(f"Error: {e.message}")

    configure_logging(settings.log_level)
    logger.info(f"MCP Server starting with DEX_API_BASE_URL: {settings.graphql_url}")
    try:
        asyncio.run(main(settings))
    except RuntimeError:
        # Raised when the loop was stopped before main() finished
        if not loop_failures:
            raise

    if loop_failures:
        logger.critical(f"Shutting down after {len(loop_failures)} unhandled event loop failure(s)")
        sys.exit(1)


if __name__ == "__main__":
    run()
