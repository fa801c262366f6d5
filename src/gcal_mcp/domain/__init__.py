"""Domain models for calendar events and credentials."""

from __future__ import annotations

from .enums import CredentialState
from .models import CalendarEvent, EventDraft, parse_timestamp

__all__ = ["CalendarEvent", "CredentialState", "EventDraft", "parse_timestamp"]
