"""
Tests for the FastAPI mirror of the tool surface.
"""

import pytest
from fastapi.testclient import TestClient

from gcal_mcp.services.http import build_app


@pytest.fixture
def client(dispatcher):
    return TestClient(build_app(dispatcher))


def test_lists_tools_in_catalog_order(client):
    response = client.get("/tools")
    assert response.status_code == 200
    tools = response.json()["tools"]
    assert [tool["name"] for tool in tools] == ["list_events", "create_event", "get_auth_url"]
    assert tools[1]["inputSchema"]["required"] == ["summary", "startDateTime", "endDateTime"]


def test_unknown_tool_is_not_a_transport_error(client):
    response = client.post("/tools/delete_event", json={"arguments": {}})
    assert response.status_code == 200
    assert response.json() == {
        "content": [{"type": "text", "text": "Error: Unknown tool: delete_event"}],
        "isError": True,
    }


def test_invalid_arguments_are_not_a_transport_error(client, fake_calendar):
    response = client.post("/tools/create_event", json={"arguments": {"summary": "S"}})
    assert response.status_code == 200
    assert response.json()["isError"] is True
    assert fake_calendar.insert_calls == []


def test_create_event(client, fake_calendar):
    response = client.post(
        "/tools/create_event",
        json={
            "arguments": {
                "summary": "S",
                "startDateTime": "2024-01-01T10:00:00Z",
                "endDateTime": "2024-01-01T11:00:00Z",
            }
        },
    )
    body = response.json()
    assert body["isError"] is False
    assert body["content"][0]["text"].startswith("Event created successfully!")
    assert len(fake_calendar.insert_calls) == 1


def test_missing_body_uses_empty_arguments(client, fake_calendar):
    response = client.post("/tools/list_events", json={})
    assert response.json()["isError"] is False
    assert fake_calendar.list_calls[0]["calendarId"] == "primary"


@pytest.mark.parametrize("arguments", [["primary"], "primary", 3])
def test_non_object_arguments_are_a_tool_error(client, fake_calendar, arguments):
    response = client.post("/tools/list_events", json={"arguments": arguments})
    assert response.status_code == 200
    assert response.json() == {
        "content": [{"type": "text", "text": "Error: Tool arguments must be an object"}],
        "isError": True,
    }
    assert fake_calendar.list_calls == []
