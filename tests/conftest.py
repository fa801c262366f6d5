"""
Shared fixtures for the gcal-mcp test-suite.

The Google Calendar API and the OAuth token endpoint are replaced by in-memory
fakes so tests exercise the real dispatcher, credential manager and handlers
without network access.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from gcal_mcp.api import Dispatcher, ToolInvocation, ToolResult
from gcal_mcp.config import AppSettings, GoogleOAuthSettings, LoggingSettings, ServerSettings
from gcal_mcp.domain import parse_timestamp
from gcal_mcp.services import CredentialManager, ServiceContext


# ============================================================================
# Fake Google Calendar v3 client
# ============================================================================


class FakeRequest:
    def __init__(self, fn: Callable[[], Dict[str, Any]]):
        self._fn = fn

    def execute(self) -> Dict[str, Any]:
        return self._fn()


class FakeEventsResource:
    def __init__(self, client: "FakeCalendarClient"):
        self._client = client

    def list(self, **params: Any) -> FakeRequest:
        self._client.list_calls.append(params)
        return FakeRequest(lambda: {"items": self._client.matching(params)})

    def insert(self, calendarId: str, body: Dict[str, Any]) -> FakeRequest:
        self._client.insert_calls.append({"calendarId": calendarId, "body": body})
        return FakeRequest(lambda: self._client.store(calendarId, body))


class FakeCalendarClient:
    """Mimics ``build("calendar", "v3")`` for events().list/insert."""

    def __init__(self):
        self.events_by_calendar: Dict[str, List[Dict[str, Any]]] = {}
        self.list_calls: List[Dict[str, Any]] = []
        self.insert_calls: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None

    def events(self) -> FakeEventsResource:
        if self.error is not None:
            raise self.error
        return FakeEventsResource(self)

    def seed(self, calendar_id: str, *records: Dict[str, Any]) -> None:
        self.events_by_calendar.setdefault(calendar_id, []).extend(records)

    def store(self, calendar_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        event_id = f"evt{sum(len(items) for items in self.events_by_calendar.values()) + 1}"
        record = {
            "id": event_id,
            "htmlLink": f"https://www.google.com/calendar/event?eid={event_id}",
            **body,
        }
        self.seed(calendar_id, record)
        return record

    def matching(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        lower = parse_timestamp(params["timeMin"])
        upper = parse_timestamp(params["timeMax"]) if params.get("timeMax") else None

        def boundary(record: Dict[str, Any], key: str):
            value = record[key].get("dateTime") or record[key].get("date") + "T00:00:00+00:00"
            return parse_timestamp(value)

        items = [
            record
            for record in self.events_by_calendar.get(params["calendarId"], [])
            if boundary(record, "end") > lower and (upper is None or boundary(record, "start") < upper)
        ]
        items.sort(key=lambda record: boundary(record, "start"))
        return items[: params["maxResults"]]


# ============================================================================
# Fake OAuth token endpoint
# ============================================================================


class FakeTokenResponse:
    def __init__(self, status: int, payload: Dict[str, Any]):
        self.status = status
        self.headers = {"content-type": "application/json"}
        self.data = json.dumps(payload).encode("utf-8")


class FakeTokenTransport:
    """Callable standing in for ``google.auth.transport.requests.Request``."""

    def __init__(self, status: int = 200, payload: Optional[Dict[str, Any]] = None):
        self.status = status
        self.payload = payload or {"access_token": "access-1", "expires_in": 3600, "token_type": "Bearer"}
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "method": method, "body": body})
        return FakeTokenResponse(self.status, self.payload)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_calendar():
    return FakeCalendarClient()


@pytest.fixture
def token_transport():
    return FakeTokenTransport()


@pytest.fixture
def settings(tmp_path: Path):
    return AppSettings(
        google=GoogleOAuthSettings(
            client_id="client-id",
            client_secret="client-secret",
            refresh_token="refresh-token",
        ),
        server=ServerSettings(),
        logging=LoggingSettings(directory=tmp_path),
    )


@pytest.fixture
def credentials(fake_calendar, token_transport):
    return CredentialManager(
        "client-id",
        "client-secret",
        refresh_token="refresh-token",
        client_factory=lambda creds: fake_calendar,
        request_factory=lambda: token_transport,
    )


@pytest.fixture
def unauthorized_credentials(fake_calendar, token_transport):
    return CredentialManager(
        "client-id",
        "client-secret",
        client_factory=lambda creds: fake_calendar,
        request_factory=lambda: token_transport,
    )


@pytest.fixture
def context(credentials, settings):
    return ServiceContext(credentials=credentials, settings=settings)


@pytest.fixture
def dispatcher(context):
    return Dispatcher(context)


@pytest.fixture
def call(dispatcher) -> Callable[..., ToolResult]:
    """Invoke a tool through the dispatcher and wait for its result."""

    def _call(name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        return asyncio.run(dispatcher.handle(ToolInvocation(name=name, arguments=arguments or {})))

    return _call
