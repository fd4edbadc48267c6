"""One-shot tool invocation: ``dex-mcp-call <tool> '<json arguments>'``.

Prints the tool's response text on stdout. Exit status is 0 on success,
1 when the tool returned an error, 2 for bad arguments or configuration.
"""
import argparse
import asyncio
import json
import sys
from typing import Optional

from mcp.types import CallToolResult

from . import tools
from .client import DexClient, build_http_client
from .config import Settings, configure_logging, load_settings
from .dispatcher import dispatch
from .errors import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dex-mcp-call", description="Invoke a single Dex MCP tool")
    parser.add_argument("tool", nargs="?", help="Tool name")
    parser.add_argument("arguments", nargs="?", default="{}", help="Tool arguments as a JSON object")
    parser.add_argument("--list", action="store_true", help="List available tools and exit")
    return parser


async def call_once(settings: Settings, name: str, arguments: dict) -> CallToolResult:
    async with build_http_client(settings.api_key) as http:
        client = DexClient(http, settings.graphql_url, settings.rest_url)
        return await dispatch(name, arguments, client)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for tool in tools.get_tools():
            print(f"{tool.name}: {tool.description}")
        return 0

    if not args.tool:
        parser.print_usage(sys.stderr)
        return 2

    try:
        arguments = json.loads(args.arguments)
    except json.JSONDecodeError as e:
        print(f"Error: arguments must be a JSON object ({e})", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("Error: arguments must be a JSON object", file=sys.stderr)
        return 2

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    result = asyncio.run(call_once(settings, args.tool, arguments))

    text = "\n".join(block.text for block in result.content)
    if result.isError:
        print(text, file=sys.stderr)
        return 1
    print(text)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
