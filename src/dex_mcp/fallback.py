"""Partial-id lookup over a window of recent Dex records.

Agents sometimes hold an identifier that is not a UUID (a truncated id, a
numeric id from another system, or just a name). These helpers filter the
most recent records locally so the agent can recover the real UUID.
"""
from typing import Iterable, Sequence

# Size of the recent-records window fetched for partial-id lookups
RECENT_WINDOW = 50

CONTACT_SEARCH_FIELDS = ("full_name", "first_name", "last_name", "company")
REMINDER_SEARCH_FIELDS = ("text",)


def find_by_partial(
    partial: str,
    records: Iterable[dict],
    fields: Sequence[str],
) -> list[dict]:
    """Return records whose id contains partial, or whose display fields do.

    The id match is case-sensitive; display fields are matched
    case-insensitively. Records missing a field are skipped for that field.
    """
    partial = partial or ""
    needle = partial.lower()

    matches = []
    for record in records:
        record_id = record.get("id") or ""
        if partial in record_id:
            matches.append(record)
            continue
        for field in fields:
            value = record.get(field)
            if value and needle in str(value).lower():
                matches.append(record)
                break
    return matches
