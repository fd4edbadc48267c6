"""Route tool calls to handlers and convert every outcome to a CallToolResult.

Used by both the stdio MCP server and the one-shot CLI. ``dispatch`` never
raises: unknown tools, missing arguments, Dex errors, connection failures and
unexpected exceptions all come back as error results.
"""
import logging
import traceback
from typing import Any, Optional

import httpx
from mcp.types import CallToolResult

from . import handlers
from . import tools
from .client import DexClient
from .errors import UpstreamError, error_result, missing_arguments

logger = logging.getLogger("dex-mcp")

# Map tool names to handler functions
HANDLERS = {
    # Contact handlers
    "get_contacts": handlers.handle_get_contacts,
    "get_contact_by_id": handlers.handle_get_contact_by_id,
    "search_contacts": handlers.handle_search_contacts,
    "find_contacts_by_partial_id": handlers.handle_find_contacts_by_partial_id,
    "create_contact": handlers.handle_create_contact,
    "update_contact": handlers.handle_update_contact,
    "delete_contact": handlers.handle_delete_contact,
    # Note handlers
    "get_notes_by_contact": handlers.handle_get_notes_by_contact,
    "get_all_notes": handlers.handle_get_all_notes,
    "search_notes": handlers.handle_search_notes,
    "create_note": handlers.handle_create_note,
    "update_note": handlers.handle_update_note,
    "delete_note": handlers.handle_delete_note,
    # Reminder handlers
    "get_reminders_by_contact": handlers.handle_get_reminders_by_contact,
    "get_all_reminders": handlers.handle_get_all_reminders,
    "search_reminders": handlers.handle_search_reminders,
    "find_reminders_by_partial_id": handlers.handle_find_reminders_by_partial_id,
    "create_reminder": handlers.handle_create_reminder,
    "update_reminder": handlers.handle_update_reminder,
    "complete_reminder": handlers.handle_complete_reminder,
    "delete_reminder": handlers.handle_delete_reminder,
}

# Required argument names per tool, taken from the tool schemas
REQUIRED_ARGUMENTS = {
    name: tuple(tools.get_tool(name).inputSchema.get("required", []))
    for name in HANDLERS
}


def _missing(name: str, arguments: dict) -> list[str]:
    return [
        field for field in REQUIRED_ARGUMENTS.get(name, ())
        if arguments.get(field) is None
    ]


async def dispatch(name: str, arguments: Optional[dict[str, Any]], client: DexClient) -> CallToolResult:
    """Run one tool call against Dex and return the response envelope."""
    arguments = dict(arguments or {})
    logger.info(f"Tool call: {name} with arguments: {arguments}")

    handler = HANDLERS.get(name)
    if not handler:
        logger.warning(f"Unknown tool requested: {name}")
        return error_result(f"Unknown tool: {name}")

    missing = _missing(name, arguments)
    if missing:
        logger.info(f"Rejected {name}: missing {missing}")
        return error_result(missing_arguments(missing))

    try:
        result = await handler(arguments, client)
        if result.isError:
            logger.info(f"{name} returned an error result: {result.content[0].text}")
        return result

    except UpstreamError as e:
        logger.error(f"Dex error during {name} call: {e.message}")
        return error_result(e)

    except httpx.RequestError as e:
        # Network/connection errors
        logger.error(f"Request error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {str(e)}")
        logger.error(f"  Traceback: {traceback.format_exc()}")
        return error_result(f"Connection failed - {str(e)}")

    except Exception as e:
        # Catch-all for unexpected errors
        logger.error(f"Unexpected error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {str(e)}")
        logger.error(f"  Arguments: {arguments}")
        logger.error(f"  Traceback:\n{traceback.format_exc()}")
        return error_result(f"{type(e).__name__}: {str(e)}")
