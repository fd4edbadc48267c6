"""Dex MCP Server - Model Context Protocol integration for Dex.

This package provides MCP (Model Context Protocol) integration for the Dex
personal CRM, enabling AI assistants to work with contacts, notes and reminders.

Modules:
- server: stdio MCP server implementation
- cli: one-shot tool invocation from the command line
- dispatcher: routes tool calls to handlers
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- client: Dex GraphQL/REST client
- validation: identifier checks and meeting type normalization
- fallback: partial-id lookup over recent records
- errors: error taxonomy and response envelopes
- formatters: Response formatting utilities
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers
from . import dispatcher

__all__ = ["formatters", "tools", "handlers", "dispatcher", "__version__"]
