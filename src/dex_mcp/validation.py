"""Input checks applied to tool arguments before they reach Dex.

Dex rejects primary keys that are not UUIDs, and only accepts a fixed set of
meeting types on timeline items. Both are checked or normalized here so the
handlers never send a request the service is guaranteed to refuse.
"""
import re
from types import MappingProxyType
from typing import Any, Optional

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
UUID_FORMAT = "xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"

DEFAULT_MEETING_TYPE = "note"

# Meeting types as shown in the Dex UI, in display order
MEETING_TYPES = (
    "note",
    "call",
    "email",
    "text_messaging",
    "linkedin",
    "skype_teams",
    "slack",
    "coffee",
    "networking",
    "party_social",
    "other",
    "meal",
    "meeting",
    "custom",
)
VALID_MEETING_TYPES = frozenset(MEETING_TYPES)

# Display name (any case, spaces or slashes) or enum value -> Dex enum value
MEETING_TYPE_MAP = MappingProxyType({
    "note": "note",
    "call": "call",
    "email": "email",
    "text_messaging": "text_messaging",
    "text/messaging": "text_messaging",
    "text messaging": "text_messaging",
    "linkedin": "linkedin",
    "skype_teams": "skype_teams",
    "skype/teams": "skype_teams",
    "skype teams": "skype_teams",
    "slack": "slack",
    "coffee": "coffee",
    "networking": "networking",
    "party_social": "party_social",
    "party/social": "party_social",
    "party social": "party_social",
    "other": "other",
    "meal": "meal",
    "meeting": "meeting",
    "custom": "custom",
})


def is_valid_uuid(value: Any) -> bool:
    """Return True if value is a UUID string Dex will accept as a primary key."""
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value) is not None


def canonicalize_meeting_type(raw: Optional[str]) -> str:
    """Map a loosely formatted meeting type label to a Dex enum value.

    Accepts display names ("Text/Messaging", "Skype teams") in any case as well
    as the enum values themselves. Anything unrecognized becomes "note".
    """
    if not raw:
        return DEFAULT_MEETING_TYPE

    raw = str(raw)
    normalized = re.sub(r"\s+", "_", raw.strip().lower()).replace("/", "_")
    meeting_type = MEETING_TYPE_MAP.get(normalized) or MEETING_TYPE_MAP.get(raw.lower())

    if meeting_type not in VALID_MEETING_TYPES:
        return DEFAULT_MEETING_TYPE
    return meeting_type
