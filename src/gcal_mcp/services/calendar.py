from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..domain import CalendarEvent, EventDraft
from .auth import CredentialManager

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalendarService:
    credentials: CredentialManager

    def list_events(
        self,
        *,
        calendar_id: str,
        time_min: str,
        max_results: int,
        time_max: Optional[str] = None,
    ) -> List[CalendarEvent]:
        """List single event instances ordered by start time."""

        params: Dict[str, Any] = {
            "calendarId": calendar_id,
            "timeMin": time_min,
            "maxResults": max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }
        if time_max:
            params["timeMax"] = time_max
        client = self.credentials.authenticated_client()
        response = client.events().list(**params).execute()
        items = response.get("items") or []
        logger.debug("Fetched %d events from calendar %s", len(items), calendar_id)
        return [CalendarEvent.from_record(item) for item in items]

    def insert_event(self, *, calendar_id: str, draft: EventDraft) -> Dict[str, Any]:
        client = self.credentials.authenticated_client()
        created = client.events().insert(calendarId=calendar_id, body=draft.to_record()).execute()
        logger.debug("Created event %s in calendar %s", created.get("id"), calendar_id)
        return created
