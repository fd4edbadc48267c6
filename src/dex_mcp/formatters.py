"""Shared formatting functions for MCP responses.

Query results are returned to the agent as indented JSON so nothing the
service sends back is lost; partial-id matches get a compact listing that
puts the UUID first.
"""
import json
from typing import Any


def to_json(data: Any) -> str:
    """Serialize a Dex payload the way every tool response embeds it."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_contact_match(contact: dict) -> str:
    """Format a contact found by partial id."""
    return f"""ID: {contact.get('id')}
Name: {contact.get('full_name')}
Company: {contact.get('company') or 'N/A'}
---"""


def format_reminder_match(reminder: dict) -> str:
    """Format a reminder found by partial id."""
    return f"""ID: {reminder.get('id')}
Text: {reminder.get('text')}
Due: {reminder.get('due_at_date')}
Complete: {reminder.get('is_complete')}
---"""


def format_matches(kind: str, term: str, matches: list[dict], formatter) -> str:
    """Summarize partial-id matches, or explain that none were found."""
    if not matches:
        return f'No {kind}s found matching "{term}". Try a different search term.'

    items_text = "\n".join(formatter(item) for item in matches)
    return f'Found {len(matches)} {kind}(s) matching "{term}":\n\n{items_text}'
