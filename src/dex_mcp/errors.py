"""Error taxonomy and response envelopes for Dex tool calls.

Every tool call ends in a CallToolResult. Expected failures (bad identifiers,
missing arguments) are returned by handlers as error results; remote failures
are raised by the client as UpstreamError and converted by the dispatcher.
"""
import re
from typing import Optional

from mcp.types import CallToolResult, TextContent

from .validation import MEETING_TYPES, UUID_FORMAT


class DexToolError(Exception):
    """Base class for failures reported back to the calling agent."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DexToolError):
    """Argument rejected locally, before any request is made."""


class ConfigurationError(DexToolError):
    """Process configuration is incomplete (e.g. missing API key)."""


class UpstreamError(DexToolError):
    """Dex returned GraphQL errors or a non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConstraintError(UpstreamError):
    """Dex rejected a note because its meeting type is not an allowed value."""


class PartialWriteError(UpstreamError):
    """First step of a two-step write succeeded, the second failed.

    The created record is left in place; ``created_id`` identifies it so the
    caller can link or delete it.
    """

    def __init__(self, message: str, created_id: str, cause: Exception):
        super().__init__(
            message,
            status_code=getattr(cause, "status_code", None),
            body=getattr(cause, "body", None),
        )
        self.created_id = created_id
        self.cause = cause


_MEETING_TYPE_REJECTION = re.compile(
    r"constraint|enum|invalid input value|not a valid|foreign key", re.IGNORECASE
)


def invalid_identifier(
    label: str,
    value: object,
    recovery_tool: Optional[str] = None,
) -> ValidationError:
    """Build the ValidationError for a non-UUID identifier.

    ``label`` names the argument in the message, e.g. "contact ID" or "contactId".
    """
    message = f'Invalid UUID format for {label}: "{value}". Expected format: {UUID_FORMAT}'
    if recovery_tool:
        message += (
            f"\n\nThis appears to be a non-UUID identifier. To find the correct UUID, use "
            f'{recovery_tool} with partialId: "{value}"'
        )
    return ValidationError(message)


def missing_arguments(names: list[str]) -> ValidationError:
    return ValidationError(f"Missing required argument(s): {', '.join(names)}")


def translate_note_error(error: UpstreamError) -> UpstreamError:
    """Rephrase a meeting_type rejection from Dex into an actionable error."""
    detail = f"{error.message} {error.body or ''}"
    if "meeting_type" in detail and _MEETING_TYPE_REJECTION.search(detail):
        return ConstraintError(
            "Dex rejected the note's meeting type. "
            f"Valid meeting types are: {', '.join(MEETING_TYPES)}",
            status_code=error.status_code,
            body=error.body,
        )
    return error


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(error: DexToolError | str) -> CallToolResult:
    """Wrap a failure in the error envelope returned to the agent."""
    message = error.message if isinstance(error, DexToolError) else error
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {message}")],
        isError=True,
    )
