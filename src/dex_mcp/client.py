"""Dex API client.

Thin async wrapper around the Dex Hasura GraphQL endpoint and the REST
endpoint used for note creation. Every method returns the decoded ``data``
payload; GraphQL errors and non-2xx responses are raised as UpstreamError.
Identifier validation happens in the handlers, not here.
"""
import json
import logging
from typing import Any, Optional

import httpx

from .errors import PartialWriteError, UpstreamError
from .fallback import RECENT_WINDOW

logger = logging.getLogger("dex-mcp.client")

DEFAULT_GRAPHQL_URL = "https://api.getdex.com/v1/graphql"
DEFAULT_REST_URL = "https://api.getdex.com/api/rest"
API_KEY_HEADER = "x-hasura-dex-api-key"

# Search results are capped by the service query
SEARCH_LIMIT = 20


# ============================================================================
# Queries
# ============================================================================

CONTACT_FIELDS = """
          id
          full_name
          first_name
          last_name
          company
          job_title
          contact_emails {
            email
            label
          }
          contact_phone_numbers {
            phone_number
            label
          }"""

NOTE_FIELDS = """
          id
          note
          event_time
          created_at
          timeline_items_contacts {
            contact {
              full_name
              id
            }
          }"""

REMINDER_FIELDS = """
          id
          text
          due_at_date
          is_complete
          created_at
          recurrence
          reminders_contacts {
            contact {
              full_name
              id
            }
          }"""

GET_CONTACTS = f"""
  query GetContacts($limit: Int!, $offset: Int!) {{
    contacts(limit: $limit, offset: $offset, order_by: {{updated_at: desc}}) {{{CONTACT_FIELDS}
          created_at
          updated_at
    }}
  }}"""

GET_CONTACT = """
  query GetContact($id: uuid!) {
    contacts_by_pk(id: $id) {
      id
      full_name
      first_name
      last_name
      company
      job_title
      description
      created_at
      updated_at
      contact_emails {
        email
        label
      }
      contact_phone_numbers {
        phone_number
        label
      }
      timeline_items_contacts(order_by: {timeline_item: {created_at: desc}}) {
        timeline_item {
          id
          note
          event_time
          meeting_type
          created_at
        }
      }
      reminders_contacts {
        reminder {
          id
          text
          due_at_date
          is_complete
          recurrence
          created_at
        }
      }
    }
  }"""

SEARCH_CONTACTS = f"""
  query SearchContacts($searchTerm: String!, $limit: Int!) {{
    contacts(where: {{
      _or: [
        {{full_name: {{_ilike: $searchTerm}}}},
        {{first_name: {{_ilike: $searchTerm}}}},
        {{last_name: {{_ilike: $searchTerm}}}},
        {{company: {{_ilike: $searchTerm}}}}
      ]
    }}, limit: $limit) {{{CONTACT_FIELDS}
    }}
  }}"""

RECENT_CONTACTS = f"""
  query RecentContacts($limit: Int!) {{
    contacts(order_by: {{updated_at: desc}}, limit: $limit) {{{CONTACT_FIELDS}
    }}
  }}"""

CREATE_CONTACT = """
  mutation CreateContact($contact: contacts_insert_input!) {
    insert_contacts_one(object: $contact) {
      id
      full_name
      first_name
      last_name
      company
      job_title
      created_at
    }
  }"""

UPDATE_CONTACT = """
  mutation UpdateContact($id: uuid!, $updates: contacts_set_input!) {
    update_contacts_by_pk(pk_columns: {id: $id}, _set: $updates) {
      id
      full_name
      first_name
      last_name
      company
      job_title
      updated_at
    }
  }"""

DELETE_CONTACT = """
  mutation DeleteContact($id: uuid!) {
    delete_contacts_by_pk(id: $id) {
      id
      full_name
    }
  }"""

GET_NOTES_BY_CONTACT = f"""
  query GetNotesByContact($contactId: uuid!) {{
    timeline_items(
      where: {{
        timeline_items_contacts: {{contact_id: {{_eq: $contactId}}}},
        note: {{_is_null: false}}
      }},
      order_by: {{created_at: desc}}
    ) {{{NOTE_FIELDS}
    }}
  }}"""

GET_ALL_NOTES = f"""
  query GetAllNotes($limit: Int!, $offset: Int!) {{
    timeline_items(
      where: {{note: {{_is_null: false}}}},
      order_by: {{created_at: desc}},
      limit: $limit,
      offset: $offset
    ) {{{NOTE_FIELDS}
    }}
  }}"""

SEARCH_NOTES = f"""
  query SearchNotes($searchTerm: String!, $limit: Int!) {{
    timeline_items(
      where: {{
        _and: [
          {{note: {{_is_null: false}}}},
          {{note: {{_ilike: $searchTerm}}}}
        ]
      }},
      order_by: {{created_at: desc}},
      limit: $limit
    ) {{{NOTE_FIELDS}
    }}
  }}"""

UPDATE_NOTE = """
  mutation UpdateNote($id: uuid!, $note: String!) {
    update_timeline_items_by_pk(pk_columns: {id: $id}, _set: {note: $note}) {
      id
      note
      created_at
    }
  }"""

DELETE_NOTE = """
  mutation DeleteNote($id: uuid!) {
    delete_timeline_items_by_pk(id: $id) {
      id
    }
  }"""

GET_REMINDERS_BY_CONTACT = """
  query GetRemindersByContact($contactId: uuid!) {
    reminders_contacts(
      where: {contact_id: {_eq: $contactId}},
      order_by: {reminder: {due_at_date: asc}}
    ) {
      reminder {
        id
        text
        due_at_date
        is_complete
        created_at
        recurrence
      }
    }
  }"""

GET_ALL_REMINDERS = f"""
  query GetAllReminders($limit: Int!, $offset: Int!) {{
    reminders(order_by: {{due_at_date: asc}}, limit: $limit, offset: $offset) {{{REMINDER_FIELDS}
    }}
  }}"""

SEARCH_REMINDERS = f"""
  query SearchReminders($searchTerm: String!, $limit: Int!) {{
    reminders(
      where: {{text: {{_ilike: $searchTerm}}}},
      order_by: {{due_at_date: asc}},
      limit: $limit
    ) {{{REMINDER_FIELDS}
    }}
  }}"""

RECENT_REMINDERS = f"""
  query RecentReminders($limit: Int!) {{
    reminders(order_by: {{created_at: desc}}, limit: $limit) {{{REMINDER_FIELDS}
    }}
  }}"""

CREATE_REMINDER = """
  mutation CreateReminder($reminder: reminders_insert_input!) {
    insert_reminders_one(object: $reminder) {
      id
      text
      due_at_date
      is_complete
      created_at
      recurrence
    }
  }"""

LINK_REMINDER = """
  mutation LinkReminderToContact($reminderContact: reminders_contacts_insert_input!) {
    insert_reminders_contacts_one(object: $reminderContact) {
      reminder_id
      contact_id
    }
  }"""

UPDATE_REMINDER = """
  mutation UpdateReminder($id: uuid!, $updates: reminders_set_input!) {
    update_reminders_by_pk(pk_columns: {id: $id}, _set: $updates) {
      id
      text
      due_at_date
      is_complete
      recurrence
      created_at
    }
  }"""

DELETE_REMINDER = """
  mutation DeleteReminder($id: uuid!) {
    delete_reminders_by_pk(id: $id) {
      id
    }
  }"""


def build_http_client(api_key: str, timeout: float = 30.0) -> httpx.AsyncClient:
    """Create the shared HTTP client with Dex authentication headers."""
    headers = {
        "Content-Type": "application/json",
        API_KEY_HEADER: api_key,
    }
    return httpx.AsyncClient(timeout=timeout, headers=headers)


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    logger.error("HTTP error from Dex:")
    logger.error(f"  Status: {response.status_code}")
    logger.error(f"  URL: {response.request.url}")
    logger.error(f"  Response text: {response.text}")
    raise UpstreamError(
        f"API Error: {response.status_code} - {response.reason_phrase}",
        status_code=response.status_code,
        body=response.text,
    )


class DexClient:
    """Issues the fixed set of Dex queries and mutations used by the tools."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        graphql_url: str = DEFAULT_GRAPHQL_URL,
        rest_url: str = DEFAULT_REST_URL,
    ):
        self.http = http
        self.graphql_url = graphql_url
        self.rest_url = rest_url.rstrip("/")

    async def execute(self, query: str, variables: Optional[dict] = None) -> dict:
        """Run a GraphQL operation and return its data payload."""
        response = await self.http.post(
            self.graphql_url,
            json={"query": query, "variables": variables or {}},
        )
        _raise_for_status(response)
        payload = response.json()

        if payload.get("errors"):
            errors = json.dumps(payload["errors"])
            logger.error(f"GraphQL errors: {errors}")
            raise UpstreamError(f"GraphQL Error: {errors}", status_code=response.status_code, body=errors)

        return payload.get("data") or {}

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    async def get_contacts(self, limit: int, offset: int) -> dict:
        return await self.execute(GET_CONTACTS, {"limit": limit, "offset": offset})

    async def get_contact(self, contact_id: str) -> dict:
        return await self.execute(GET_CONTACT, {"id": contact_id})

    async def search_contacts(self, term: str) -> dict:
        return await self.execute(SEARCH_CONTACTS, {"searchTerm": f"%{term}%", "limit": SEARCH_LIMIT})

    async def recent_contacts(self) -> list[dict]:
        """Most recently updated contacts, newest first."""
        data = await self.execute(RECENT_CONTACTS, {"limit": RECENT_WINDOW})
        return data.get("contacts") or []

    async def create_contact(self, contact: dict) -> dict:
        return await self.execute(CREATE_CONTACT, {"contact": contact})

    async def update_contact(self, contact_id: str, updates: dict) -> dict:
        return await self.execute(UPDATE_CONTACT, {"id": contact_id, "updates": updates})

    async def delete_contact(self, contact_id: str) -> dict:
        return await self.execute(DELETE_CONTACT, {"id": contact_id})

    # ------------------------------------------------------------------
    # Notes (timeline items)
    # ------------------------------------------------------------------

    async def get_notes_by_contact(self, contact_id: str) -> dict:
        return await self.execute(GET_NOTES_BY_CONTACT, {"contactId": contact_id})

    async def get_all_notes(self, limit: int, offset: int) -> dict:
        return await self.execute(GET_ALL_NOTES, {"limit": limit, "offset": offset})

    async def search_notes(self, term: str) -> dict:
        return await self.execute(SEARCH_NOTES, {"searchTerm": f"%{term}%", "limit": SEARCH_LIMIT})

    async def create_note(
        self,
        contact_id: str,
        note: str,
        event_time: str,
        meeting_type: str,
    ) -> Any:
        """Create a note through the REST endpoint, linked to one contact."""
        payload = {
            "timeline_event": {
                "note": note,
                "event_time": event_time,
                "meeting_type": meeting_type,
                "timeline_items_contacts": {
                    "data": [{"contact_id": contact_id}],
                },
            }
        }
        response = await self.http.post(f"{self.rest_url}/timeline_items", json=payload)
        _raise_for_status(response)
        return response.json()

    async def update_note(self, note_id: str, note: str) -> dict:
        return await self.execute(UPDATE_NOTE, {"id": note_id, "note": note})

    async def delete_note(self, note_id: str) -> dict:
        return await self.execute(DELETE_NOTE, {"id": note_id})

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------

    async def get_reminders_by_contact(self, contact_id: str) -> dict:
        return await self.execute(GET_REMINDERS_BY_CONTACT, {"contactId": contact_id})

    async def get_all_reminders(self, limit: int, offset: int) -> dict:
        return await self.execute(GET_ALL_REMINDERS, {"limit": limit, "offset": offset})

    async def search_reminders(self, term: str) -> dict:
        return await self.execute(SEARCH_REMINDERS, {"searchTerm": f"%{term}%", "limit": SEARCH_LIMIT})

    async def recent_reminders(self) -> list[dict]:
        """Most recently created reminders, newest first."""
        data = await self.execute(RECENT_REMINDERS, {"limit": RECENT_WINDOW})
        return data.get("reminders") or []

    async def create_reminder(
        self,
        contact_id: str,
        text: str,
        due_date: str,
        recurrence: Optional[str] = None,
    ) -> dict:
        """Create a reminder, then link it to the contact.

        The link is only attempted once the reminder exists. A failed link does
        not delete the reminder; it is raised as PartialWriteError instead.
        """
        reminder = await self.execute(CREATE_REMINDER, {
            "reminder": {
                "text": text,
                "due_at_date": due_date,
                "recurrence": recurrence,
                "is_complete": False,
            }
        })
        reminder_id = reminder["insert_reminders_one"]["id"]

        try:
            await self.execute(LINK_REMINDER, {
                "reminderContact": {
                    "reminder_id": reminder_id,
                    "contact_id": contact_id,
                }
            })
        except (UpstreamError, httpx.RequestError) as e:
            detail = e.message if isinstance(e, UpstreamError) else f"Connection failed - {e}"
            logger.error(f"Reminder {reminder_id} created but linking to contact {contact_id} failed: {detail}")
            raise PartialWriteError(
                f"Reminder {reminder_id} was created but could not be linked to contact "
                f"{contact_id}: {detail}",
                created_id=reminder_id,
                cause=e,
            ) from e

        return reminder

    async def update_reminder(self, reminder_id: str, updates: dict) -> dict:
        return await self.execute(UPDATE_REMINDER, {"id": reminder_id, "updates": updates})

    async def delete_reminder(self, reminder_id: str) -> dict:
        return await self.execute(DELETE_REMINDER, {"id": reminder_id})
