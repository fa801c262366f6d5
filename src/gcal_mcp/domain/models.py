from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

DEFAULT_TIME_ZONE = "UTC"

_TIMESTAMP = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})?"
)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 date-time; a missing offset means UTC.

    Fractions of any length are accepted and truncated to microseconds.
    Bare dates are rejected.
    """

    match = _TIMESTAMP.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid ISO timestamp: {value}")
    fraction = (match["fraction"] or "0")[:6].ljust(6, "0")
    offset = match["offset"] or ""
    if offset.upper() == "Z":
        offset = "+00:00"
    try:
        parsed = datetime.fromisoformat(f"{match['base'].upper()}.{fraction}{offset}")
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _boundary(record: Optional[Dict[str, Any]]) -> Optional[str]:
    if not record:
        return None
    return record.get("dateTime") or record.get("date")


@dataclass(slots=True)
class CalendarEvent:
    """Flattened view of a Google Calendar event resource."""

    id: str
    summary: Optional[str]
    start: Optional[str]
    end: Optional[str]
    description: Optional[str] = None
    attendees: Optional[List[str]] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarEvent":
        attendees = record.get("attendees")
        return cls(
            id=str(record["id"]),
            summary=record.get("summary"),
            start=_boundary(record.get("start")),
            end=_boundary(record.get("end")),
            description=record.get("description"),
            attendees=[attendee.get("email") for attendee in attendees] if attendees is not None else None,
        )


@dataclass(slots=True)
class EventDraft:
    """An event about to be inserted; naive datetimes are read as UTC by the API."""

    summary: str
    start: str
    end: str
    description: Optional[str] = None
    attendees: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        parse_timestamp(self.start)
        parse_timestamp(self.end)

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "summary": self.summary,
            "start": {"dateTime": self.start, "timeZone": DEFAULT_TIME_ZONE},
            "end": {"dateTime": self.end, "timeZone": DEFAULT_TIME_ZONE},
        }
        if self.description is not None:
            record["description"] = self.description
        if self.attendees:
            record["attendees"] = [{"email": email} for email in self.attendees]
        return record
