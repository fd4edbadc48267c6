"""Shared MCP tool definitions for Dex.

This module provides the definitive list of MCP tools exposed by both the
stdio server and the one-shot CLI. The dispatcher's handler map must contain
exactly these names.
"""

from mcp.types import Tool

from .validation import MEETING_TYPES


def _id_schema(description: str) -> dict:
    return {
        "type": "object",
        "properties": {
            "id": {
                "type": "string",
                "description": description
            }
        },
        "required": ["id"]
    }


def _pagination_schema(noun: str) -> dict:
    return {
        "type": "object",
        "properties": {
            "limit": {
                "type": "number",
                "description": f"Number of {noun} to retrieve (default: 50)"
            },
            "offset": {
                "type": "number",
                "description": "Offset for pagination (default: 0)"
            }
        }
    }


def _search_schema(description: str) -> dict:
    return {
        "type": "object",
        "properties": {
            "searchTerm": {
                "type": "string",
                "description": description
            }
        },
        "required": ["searchTerm"]
    }


def _partial_id_schema(description: str) -> dict:
    # Both spellings are accepted; at least one must be given
    return {
        "type": "object",
        "properties": {
            "partialId": {
                "type": "string",
                "description": description
            },
            "partial_id": {
                "type": "string",
                "description": "Alias of partialId"
            }
        },
        "anyOf": [
            {"required": ["partialId"]},
            {"required": ["partial_id"]}
        ]
    }


_CONTACT_FIELDS = {
    "first_name": {
        "type": "string",
        "description": "First name"
    },
    "last_name": {
        "type": "string",
        "description": "Last name"
    },
    "company": {
        "type": "string",
        "description": "Company name"
    },
    "job_title": {
        "type": "string",
        "description": "Job title"
    },
    "description": {
        "type": "string",
        "description": "Description/notes about the contact"
    }
}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for Dex contacts, notes and reminders."""
    return [
        # ============================================================================
        # Contact Tools
        # ============================================================================
        Tool(
            name="get_contacts",
            description="Get a list of contacts from Dex, most recently updated first.",
            inputSchema=_pagination_schema("contacts")
        ),
        Tool(
            name="get_contact_by_id",
            description="Get a specific contact by UUID, including its notes and reminders. "
                       "If you only have a partial or non-UUID id, use find_contacts_by_partial_id first.",
            inputSchema=_id_schema("Contact UUID")
        ),
        Tool(
            name="search_contacts",
            description="Search contacts by name or company (up to 20 results).",
            inputSchema=_search_schema("Search term")
        ),
        Tool(
            name="find_contacts_by_partial_id",
            description="Find contacts by partial ID, name, or company. "
                       "Use this when you have an invalid UUID and need to find the correct contact UUID. "
                       "Searches the 50 most recently updated contacts.",
            inputSchema=_partial_id_schema(
                "Partial ID, name, company, or any identifying information for the contact"
            )
        ),
        Tool(
            name="create_contact",
            description="Create a new contact.",
            inputSchema={
                "type": "object",
                "properties": dict(_CONTACT_FIELDS),
                "required": ["first_name"]
            }
        ),
        Tool(
            name="update_contact",
            description="Update an existing contact. Only the fields provided are changed.",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Contact UUID"
                    },
                    **_CONTACT_FIELDS
                },
                "required": ["id"]
            }
        ),
        Tool(
            name="delete_contact",
            description="Delete a contact.",
            inputSchema=_id_schema("Contact UUID")
        ),
        # ============================================================================
        # Note Tools
        # ============================================================================
        Tool(
            name="get_notes_by_contact",
            description="Get all notes for a specific contact, newest first.",
            inputSchema={
                "type": "object",
                "properties": {
                    "contactId": {
                        "type": "string",
                        "description": "Contact UUID"
                    }
                },
                "required": ["contactId"]
            }
        ),
        Tool(
            name="get_all_notes",
            description="Get all notes with pagination, newest first.",
            inputSchema=_pagination_schema("notes")
        ),
        Tool(
            name="search_notes",
            description="Search notes by content (up to 20 results).",
            inputSchema=_search_schema("Search term to find in note content")
        ),
        Tool(
            name="create_note",
            description="Create a new note for a contact. Optionally specify the note/meeting type "
                       "(e.g., note, call, email, text_messaging). Display names such as "
                       "'Text/Messaging' or 'Skype teams' are accepted; unknown types become 'note'.",
            inputSchema={
                "type": "object",
                "properties": {
                    "contactId": {
                        "type": "string",
                        "description": "Contact UUID"
                    },
                    "content": {
                        "type": "string",
                        "description": "Note content"
                    },
                    "eventTime": {
                        "type": "string",
                        "description": "Event time (ISO format, optional, default: now)"
                    },
                    "meetingType": {
                        "type": "string",
                        "description": f"Type of note/meeting ({', '.join(MEETING_TYPES)})"
                    }
                },
                "required": ["contactId", "content"]
            }
        ),
        Tool(
            name="update_note",
            description="Update the content of an existing note.",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Note UUID"
                    },
                    "content": {
                        "type": "string",
                        "description": "Updated note content"
                    }
                },
                "required": ["id", "content"]
            }
        ),
        Tool(
            name="delete_note",
            description="Delete a note.",
            inputSchema=_id_schema("Note UUID")
        ),
        # ============================================================================
        # Reminder Tools
        # ============================================================================
        Tool(
            name="get_reminders_by_contact",
            description="Get all reminders for a specific contact, ordered by due date.",
            inputSchema={
                "type": "object",
                "properties": {
                    "contactId": {
                        "type": "string",
                        "description": "Contact UUID"
                    }
                },
                "required": ["contactId"]
            }
        ),
        Tool(
            name="get_all_reminders",
            description="Get all reminders with pagination, ordered by due date.",
            inputSchema=_pagination_schema("reminders")
        ),
        Tool(
            name="search_reminders",
            description="Search reminders by text (up to 20 results).",
            inputSchema=_search_schema("Search term to find in reminder text")
        ),
        Tool(
            name="find_reminders_by_partial_id",
            description="Find reminders by partial ID or text content. "
                       "Use this when you have an invalid UUID (e.g. a numeric id) and need to find "
                       "the correct reminder UUID. Searches the 50 most recently created reminders.",
            inputSchema=_partial_id_schema(
                "Partial ID, text content, or any identifying information for the reminder"
            )
        ),
        Tool(
            name="create_reminder",
            description="Create a new reminder and link it to a contact.",
            inputSchema={
                "type": "object",
                "properties": {
                    "contactId": {
                        "type": "string",
                        "description": "Contact UUID"
                    },
                    "text": {
                        "type": "string",
                        "description": "Reminder text"
                    },
                    "dueDate": {
                        "type": "string",
                        "description": "Due date (YYYY-MM-DD format)"
                    },
                    "recurrence": {
                        "type": "string",
                        "description": "Recurrence pattern (optional)"
                    }
                },
                "required": ["contactId", "text", "dueDate"]
            }
        ),
        Tool(
            name="update_reminder",
            description="Update an existing reminder. Only the fields provided are changed.",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Reminder UUID"
                    },
                    "text": {
                        "type": "string",
                        "description": "Reminder text"
                    },
                    "dueDate": {
                        "type": "string",
                        "description": "Due date (YYYY-MM-DD format)"
                    },
                    "isComplete": {
                        "type": "boolean",
                        "description": "Whether the reminder is completed"
                    },
                    "recurrence": {
                        "type": "string",
                        "description": "Recurrence pattern"
                    }
                },
                "required": ["id"]
            }
        ),
        Tool(
            name="complete_reminder",
            description="Mark a reminder as complete.",
            inputSchema=_id_schema("Reminder UUID")
        ),
        Tool(
            name="delete_reminder",
            description="Delete a reminder.",
            inputSchema=_id_schema("Reminder UUID")
        ),
    ]


def get_tool(name: str) -> Tool | None:
    """Look up a single tool definition by name."""
    for tool in get_tools():
        if tool.name == name:
            return tool
    return None
