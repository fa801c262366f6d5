from __future__ import annotations

from typing import Any, Dict, Iterable

import orjson

from ..domain import CalendarEvent
from .models import EventPayload


def serialize_event(event: CalendarEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(exclude_none=True)


def render_events(events: Iterable[CalendarEvent]) -> str:
    payload = [serialize_event(event) for event in events]
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")
