"""MCP tool handlers for Dex contacts, notes and reminders.

All handlers follow a consistent pattern:
- Accept: arguments dict and a DexClient
- Validate identifiers before any request; an invalid one is returned as an
  error result, not raised
- Normalize arguments (defaults, meeting type, field names) for Dex
- Return: CallToolResult built with text_result / error_result

Remote failures (UpstreamError, httpx errors) propagate to the dispatcher,
which turns them into error results.
"""
from datetime import datetime, timezone
from typing import Optional
import logging

from mcp.types import CallToolResult

from . import formatters
from .client import DexClient
from .errors import (
    UpstreamError,
    ValidationError,
    error_result,
    invalid_identifier,
    text_result,
    translate_note_error,
)
from .fallback import CONTACT_SEARCH_FIELDS, REMINDER_SEARCH_FIELDS, find_by_partial
from .validation import UUID_FORMAT, canonicalize_meeting_type, is_valid_uuid

logger = logging.getLogger("dex-mcp.handlers")

DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0

CONTACT_UPDATE_FIELDS = ("first_name", "last_name", "company", "job_title", "description")


def _pagination(arguments: dict) -> tuple[int, int]:
    limit = int(arguments.get("limit") or DEFAULT_LIMIT)
    offset = int(arguments.get("offset") or DEFAULT_OFFSET)
    return limit, offset


def _check_contact_id(value, label: str = "contact ID") -> Optional[ValidationError]:
    if is_valid_uuid(value):
        return None
    return invalid_identifier(label, value, recovery_tool="find_contacts_by_partial_id")


def _check_reminder_id(value) -> Optional[ValidationError]:
    if is_valid_uuid(value):
        return None
    return ValidationError(
        f'Invalid reminder ID format: "{value}".\n\n'
        f"This appears to be a non-UUID identifier. To find the correct UUID for this reminder, please use:\n"
        f'- find_reminders_by_partial_id with partialId: "{value}"\n'
        f"- search_reminders to search by reminder text\n"
        f"- get_all_reminders to see all reminders\n\n"
        f"Expected UUID format: {UUID_FORMAT}"
    )


def _check_note_id(value) -> Optional[ValidationError]:
    if is_valid_uuid(value):
        return None
    return invalid_identifier("note ID", value)


def _partial_id(arguments: dict) -> Optional[str]:
    value = arguments.get("partialId")
    if value is None:
        value = arguments.get("partial_id")
    if value is None:
        return None
    return str(value)


# ============================================================================
# Contact Handlers
# ============================================================================

async def handle_get_contacts(arguments: dict, client: DexClient) -> CallToolResult:
    """List contacts, most recently updated first."""
    limit, offset = _pagination(arguments)
    result = await client.get_contacts(limit, offset)
    logger.info(f"Listed {len(result.get('contacts') or [])} contacts (limit={limit}, offset={offset})")
    return text_result(formatters.to_json(result))


async def handle_get_contact_by_id(arguments: dict, client: DexClient) -> CallToolResult:
    """Get one contact with its emails, phone numbers, notes and reminders."""
    contact_id = arguments["id"]
    error = _check_contact_id(contact_id)
    if error:
        return error_result(error)

    result = await client.get_contact(contact_id)
    logger.info(f"Retrieved contact {contact_id}")
    return text_result(formatters.to_json(result))


async def handle_search_contacts(arguments: dict, client: DexClient) -> CallToolResult:
    result = await client.search_contacts(arguments["searchTerm"])
    return text_result(formatters.to_json(result))


async def handle_find_contacts_by_partial_id(arguments: dict, client: DexClient) -> CallToolResult:
    """Recover contact UUIDs from a partial id, name or company.

    Zero matches is not an error; the agent gets a message naming the term.
    """
    term = _partial_id(arguments)
    if term is None:
        return error_result(ValidationError("Missing required argument: partialId (or partial_id)"))

    contacts = await client.recent_contacts()
    matches = find_by_partial(term, contacts, CONTACT_SEARCH_FIELDS)
    logger.info(f"Partial contact lookup '{term}': {len(matches)} of {len(contacts)} recent contacts matched")

    text = formatters.format_matches("contact", term, matches, formatters.format_contact_match)
    return text_result(text)


async def handle_create_contact(arguments: dict, client: DexClient) -> CallToolResult:
    contact = {
        key: arguments[key]
        for key in CONTACT_UPDATE_FIELDS
        if arguments.get(key) is not None
    }
    result = await client.create_contact(contact)
    logger.info(f"Created contact {(result.get('insert_contacts_one') or {}).get('id')}")
    return text_result(f"Contact created successfully: {formatters.to_json(result)}")


async def handle_update_contact(arguments: dict, client: DexClient) -> CallToolResult:
    """Update the contact fields that were provided."""
    contact_id = arguments["id"]
    error = _check_contact_id(contact_id)
    if error:
        return error_result(error)

    updates = {
        key: arguments[key]
        for key in CONTACT_UPDATE_FIELDS
        if key in arguments
    }
    result = await client.update_contact(contact_id, updates)
    logger.info(f"Updated contact {contact_id}: {sorted(updates)}")
    return text_result(f"Contact updated successfully: {formatters.to_json(result)}")


async def handle_delete_contact(arguments: dict, client: DexClient) -> CallToolResult:
    contact_id = arguments["id"]
    error = _check_contact_id(contact_id)
    if error:
        return error_result(error)

    result = await client.delete_contact(contact_id)
    logger.info(f"Deleted contact {contact_id}")
    return text_result(f"Contact deleted successfully: {formatters.to_json(result)}")


# ============================================================================
# Note Handlers
# ============================================================================

async def handle_get_notes_by_contact(arguments: dict, client: DexClient) -> CallToolResult:
    contact_id = arguments["contactId"]
    error = _check_contact_id(contact_id, "contactId")
    if error:
        return error_result(error)

    result = await client.get_notes_by_contact(contact_id)
    return text_result(formatters.to_json(result))


async def handle_get_all_notes(arguments: dict, client: DexClient) -> CallToolResult:
    limit, offset = _pagination(arguments)
    result = await client.get_all_notes(limit, offset)
    return text_result(formatters.to_json(result))


async def handle_search_notes(arguments: dict, client: DexClient) -> CallToolResult:
    result = await client.search_notes(arguments["searchTerm"])
    return text_result(formatters.to_json(result))


async def handle_create_note(arguments: dict, client: DexClient) -> CallToolResult:
    """Create a note linked to a contact.

    The meeting type is normalized to a Dex enum value and the event time
    defaults to now. A meeting_type rejection from Dex is reported with the
    list of valid types.
    """
    contact_id = arguments["contactId"]
    error = _check_contact_id(contact_id, "contactId")
    if error:
        return error_result(error)

    meeting_type = canonicalize_meeting_type(arguments.get("meetingType"))
    event_time = arguments.get("eventTime") or datetime.now(timezone.utc).isoformat()

    try:
        result = await client.create_note(contact_id, arguments["content"], event_time, meeting_type)
    except UpstreamError as e:
        logger.error(f"Note creation for contact {contact_id} failed ({meeting_type}): {e.message}")
        return error_result(translate_note_error(e))

    logger.info(f"Created {meeting_type} note for contact {contact_id}")
    return text_result(f"Note created successfully: {formatters.to_json(result)}")


async def handle_update_note(arguments: dict, client: DexClient) -> CallToolResult:
    note_id = arguments["id"]
    error = _check_note_id(note_id)
    if error:
        return error_result(error)

    result = await client.update_note(note_id, arguments["content"])
    logger.info(f"Updated note {note_id}")
    return text_result(f"Note updated successfully: {formatters.to_json(result)}")


async def handle_delete_note(arguments: dict, client: DexClient) -> CallToolResult:
    note_id = arguments["id"]
    error = _check_note_id(note_id)
    if error:
        return error_result(error)

    result = await client.delete_note(note_id)
    logger.info(f"Deleted note {note_id}")
    return text_result(f"Note deleted successfully: {formatters.to_json(result)}")


# ============================================================================
# Reminder Handlers
# ============================================================================

async def handle_get_reminders_by_contact(arguments: dict, client: DexClient) -> CallToolResult:
    contact_id = arguments["contactId"]
    error = _check_contact_id(contact_id, "contactId")
    if error:
        return error_result(error)

    result = await client.get_reminders_by_contact(contact_id)
    return text_result(formatters.to_json(result))


async def handle_get_all_reminders(arguments: dict, client: DexClient) -> CallToolResult:
    limit, offset = _pagination(arguments)
    result = await client.get_all_reminders(limit, offset)
    return text_result(formatters.to_json(result))


async def handle_search_reminders(arguments: dict, client: DexClient) -> CallToolResult:
    result = await client.search_reminders(arguments["searchTerm"])
    return text_result(formatters.to_json(result))


async def handle_find_reminders_by_partial_id(arguments: dict, client: DexClient) -> CallToolResult:
    """Recover reminder UUIDs from a partial id or reminder text."""
    term = _partial_id(arguments)
    if term is None:
        return error_result(ValidationError("Missing required argument: partialId (or partial_id)"))

    reminders = await client.recent_reminders()
    matches = find_by_partial(term, reminders, REMINDER_SEARCH_FIELDS)
    logger.info(f"Partial reminder lookup '{term}': {len(matches)} of {len(reminders)} recent reminders matched")

    text = formatters.format_matches("reminder", term, matches, formatters.format_reminder_match)
    return text_result(text)


async def handle_create_reminder(arguments: dict, client: DexClient) -> CallToolResult:
    """Create a reminder and link it to the contact (two requests)."""
    contact_id = arguments["contactId"]
    error = _check_contact_id(contact_id, "contactId")
    if error:
        return error_result(error)

    result = await client.create_reminder(
        contact_id,
        arguments["text"],
        arguments["dueDate"],
        arguments.get("recurrence"),
    )
    logger.info(f"Created reminder {result['insert_reminders_one']['id']} for contact {contact_id}")
    return text_result(f"Reminder created successfully: {formatters.to_json(result)}")


def _reminder_updates(arguments: dict) -> dict:
    updates = {}
    if arguments.get("text"):
        updates["text"] = arguments["text"]
    if arguments.get("dueDate"):
        updates["due_at_date"] = arguments["dueDate"]
    if arguments.get("isComplete") is not None:
        updates["is_complete"] = arguments["isComplete"]
    if arguments.get("recurrence"):
        updates["recurrence"] = arguments["recurrence"]
    return updates


async def handle_update_reminder(arguments: dict, client: DexClient) -> CallToolResult:
    reminder_id = arguments["id"]
    error = _check_reminder_id(reminder_id)
    if error:
        return error_result(error)

    updates = _reminder_updates(arguments)
    result = await client.update_reminder(reminder_id, updates)
    logger.info(f"Updated reminder {reminder_id}: {sorted(updates)}")
    return text_result(f"Reminder updated successfully: {formatters.to_json(result)}")


async def handle_complete_reminder(arguments: dict, client: DexClient) -> CallToolResult:
    reminder_id = arguments["id"]
    error = _check_reminder_id(reminder_id)
    if error:
        return error_result(error)

    result = await client.update_reminder(reminder_id, {"is_complete": True})
    logger.info(f"Completed reminder {reminder_id}")
    return text_result(f"Reminder marked as complete: {formatters.to_json(result)}")


async def handle_delete_reminder(arguments: dict, client: DexClient) -> CallToolResult:
    reminder_id = arguments["id"]
    error = _check_reminder_id(reminder_id)
    if error:
        return error_result(error)

    result = await client.delete_reminder(reminder_id)
    logger.info(f"Deleted reminder {reminder_id}")
    return text_result(f"Reminder deleted successfully: {formatters.to_json(result)}")
