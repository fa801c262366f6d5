from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from ..domain import EventDraft
from ..services import CALENDAR_SCOPE, ServiceContext
from .registry import FieldSpec, register_tool
from .results import ToolResult
from .serializers import render_events

DEFAULT_CALENDAR_ID = "primary"
DEFAULT_MAX_RESULTS = 10


def utc_now_iso() -> str:
    """Current instant as an RFC 3339 UTC timestamp, e.g. ``2024-01-01T10:00:00.000Z``."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


_CALENDAR_ID = FieldSpec(
    "calendarId",
    "string",
    description="Calendar ID (default: primary)",
    default=DEFAULT_CALENDAR_ID,
)


@register_tool(
    "list_events",
    description="List upcoming events from Google Calendar",
    fields=(
        _CALENDAR_ID,
        FieldSpec(
            "maxResults",
            "integer",
            description="Maximum number of events to return",
            default=DEFAULT_MAX_RESULTS,
        ),
        FieldSpec(
            "timeMin",
            "string",
            description="Lower bound for event start time (ISO 8601, default: now)",
            default_factory=lambda: utc_now_iso(),
        ),
        FieldSpec("timeMax", "string", description="Upper bound for event start time (ISO 8601)"),
    ),
)
def list_events(
    context: ServiceContext,
    *,
    calendar_id: str,
    max_results: int,
    time_min: str,
    time_max: Optional[str] = None,
) -> ToolResult:
    events = context.calendar.list_events(
        calendar_id=calendar_id,
        time_min=time_min,
        time_max=time_max,
        max_results=max_results,
    )
    return ToolResult.from_text(render_events(events))


@register_tool(
    "create_event",
    description="Create a new event in Google Calendar",
    fields=(
        _CALENDAR_ID,
        FieldSpec("summary", "string", description="Event title", required=True),
        FieldSpec("description", "string", description="Event description"),
        FieldSpec(
            "startDateTime",
            "string",
            description="Start date and time (ISO 8601)",
            required=True,
            param="start",
        ),
        FieldSpec(
            "endDateTime",
            "string",
            description="End date and time (ISO 8601)",
            required=True,
            param="end",
        ),
        FieldSpec(
            "attendees",
            "array",
            description="List of attendee email addresses",
            items="string",
        ),
    ),
)
def create_event(
    context: ServiceContext,
    *,
    calendar_id: str,
    summary: str,
    start: str,
    end: str,
    description: Optional[str] = None,
    attendees: Optional[List[str]] = None,
) -> ToolResult:
    draft = EventDraft(
        summary=summary,
        start=start,
        end=end,
        description=description,
        attendees=list(attendees or []),
    )
    created = context.calendar.insert_event(calendar_id=calendar_id, draft=draft)
    return ToolResult.from_text(
        "Event created successfully!\n"
        f"Event ID: {created.get('id')}\n"
        f"Event Link: {created.get('htmlLink')}"
    )


@register_tool(
    "get_auth_url",
    description="Get OAuth2 authorization URL for Google Calendar access",
)
def get_auth_url(context: ServiceContext) -> ToolResult:
    auth_url = context.credentials.authorization_url([CALENDAR_SCOPE])
    return ToolResult.from_text(
        "Please visit this URL to authorize the application:\n"
        f"{auth_url}\n\n"
        "After authorization, exchange the code for a refresh token "
        "(`gcal-mcp exchange-code <code>`) and set the GOOGLE_REFRESH_TOKEN "
        "environment variable with the refresh token."
    )
