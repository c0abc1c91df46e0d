"""
Tests for the web routes
"""

import pytest
import json
import httpx
from fastapi.testclient import TestClient
from clickup_dashboard.web import main as web_main
from conftest import page_of, raw_task

SETTINGS = {"apiKey": "pk_123_ABC", "spaceId": "790", "listId": "901234", "fetchAllPages": True}


@pytest.fixture
def wire(monkeypatch, services, settings_store):
    """Point the app's global services at a stub ClickUp handler"""
    def _wire(handler=lambda request: httpx.Response(200, json=page_of(3))):
        proxy, dashboard, stub = services(handler)
        monkeypatch.setattr(web_main, "proxy_service", proxy)
        monkeypatch.setattr(web_main, "settings_store", settings_store)
        monkeypatch.setattr(web_main, "dashboard_service", dashboard)
        return TestClient(web_main.app), stub
    return _wire


def test_health_check(wire):
    client, _ = wire()

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_endpoints_listed(wire):
    client, _ = wire()

    response = client.get("/api/endpoints")

    names = [endpoint["name"] for endpoint in response.json()]
    assert "Get All Tasks (All Pages)" in names
    assert all("{" in endpoint["url"] for endpoint in response.json())


def test_proxy_rejects_invalid_list_id(wire):
    """Malformed listId gets 400 and ClickUp is never called"""
    client, stub = wire()

    response = client.post("/api/clickup-test", json={
        "apiKey": "pk_test",
        "listId": "8crb1jk-29098",
        "endpoint": "https://api.clickup.com/api/v2/list/{listId}/task",
        "fetchAllPages": True,
    })

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid List ID format"
    assert body["providedListId"] == "8crb1jk-29098"
    assert body["details"] == "List ID should contain only numbers (e.g., '123456789')"
    assert stub.requests == []


@pytest.mark.parametrize("content,error_type", [
    (json.dumps({"apiKey": "pk_test", "listId": ["8crb"]}), "string_type"),
    ("not json", "json_invalid"),
    (json.dumps({"apiKey": "pk_test", "listId": "123", "fetchAllPages": "maybe"}), "bool_parsing"),
])
def test_proxy_malformed_body_gets_error_payload(wire, content, error_type):
    """Body validation failures use the common error shape with status 400"""
    client, stub = wire()

    response = client.post("/api/clickup-test", content=content, headers={"content-type": "application/json"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request body"
    assert "detail" not in body
    assert error_type in [problem["type"] for problem in body["details"]]
    assert stub.requests == []


def test_settings_put_malformed_body(wire, settings_store):
    client, _ = wire()

    response = client.put("/api/settings", json={"apiKey": "pk_1", "fetchAllPages": "maybe"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "body.fetchAllPages"
    assert settings_store.load() is None


def test_proxy_paginated_success(wire):
    def handler(request):
        page = int(request.url.params["page"])
        return httpx.Response(200, json=page_of(100 if page == 0 else 5))

    client, stub = wire(handler)

    response = client.post("/api/clickup-test", json={
        "apiKey": "pk_test",
        "listId": "123",
        "endpoint": "https://api.clickup.com/api/v2/list/{listId}/task",
        "fetchAllPages": True,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["totalTasks"] == 105
    assert body["data"]["pagesCollected"] == 2
    assert body["requestInfo"]["listId"] == "123"


def test_proxy_upstream_error_mid_pagination(wire):
    """A 401 on page 2 is returned with its status and the collected count"""
    def handler(request):
        if request.url.params["page"] == "2":
            return httpx.Response(401, json={"err": "Token invalid"})
        return httpx.Response(200, json=page_of(100))

    client, _ = wire(handler)

    response = client.post("/api/clickup-test", json={
        "apiKey": "pk_test",
        "listId": "123",
        "fetchAllPages": True,
    })

    assert response.status_code == 401
    body = response.json()
    assert body["tasksCollected"] == 200
    assert body["details"] == {"err": "Token invalid"}
    assert "page=2" in body["requestUrl"]


def test_proxy_invalid_json_is_bad_gateway(wire):
    client, _ = wire(lambda request: httpx.Response(200, content=b"{oops", headers={"content-type": "application/json"}))

    response = client.post("/api/clickup-test", json={"apiKey": "pk_test", "listId": "123"})

    assert response.status_code == 502
    assert response.json()["error"] == "Failed to parse JSON response"


def test_tasks_route(wire):
    client, stub = wire()

    response = client.get("/api/clickup-tasks", params={"apiKey": "pk_test", "listId": "123", "fetchAllPages": "true"})

    assert response.status_code == 200
    body = response.json()
    assert body["totalTasks"] == 3
    assert body["pagesProcessed"] == 1
    assert body["fetchAllPages"] is True
    assert stub.requests[0].url.params["include_closed"] == "true"


def test_tasks_route_requires_api_key(wire):
    client, stub = wire()

    response = client.get("/api/clickup-tasks", params={"listId": "123"})

    assert response.status_code == 400
    assert response.json()["error"] == "apiKey is required"
    assert stub.requests == []


def test_settings_lifecycle(wire):
    client, _ = wire()

    assert client.get("/api/settings").status_code == 404

    response = client.put("/api/settings", json=SETTINGS)
    assert response.status_code == 200
    assert response.json()["listId"] == "901234"

    assert client.get("/api/settings").json()["apiKey"] == "pk_123_ABC"

    assert client.delete("/api/settings").json() == {"success": True}
    assert client.get("/api/settings").status_code == 404


def test_settings_export_and_import(wire, settings_store):
    client, _ = wire()
    client.put("/api/settings", json=SETTINGS)

    exported = client.get("/api/settings/export")
    assert exported.status_code == 200
    assert "attachment" in exported.headers["content-disposition"]

    client.delete("/api/settings")
    response = client.post(
        "/api/settings/import",
        files={"file": ("clickup_api_settings.json", exported.content, "application/json")},
    )

    assert response.status_code == 200
    assert response.json()["settings"] == json.loads(exported.content)
    assert settings_store.load().list_id == "901234"


def test_settings_export_without_settings(wire):
    client, _ = wire()

    response = client.get("/api/settings/export")

    assert response.status_code == 400
    assert response.json()["error"] == "No settings to export"


def test_settings_import_rejects_invalid_file(wire):
    client, _ = wire()

    response = client.post("/api/settings/import", files={"file": ("bad.json", b"not json", "application/json")})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid settings file"


def test_dashboard_without_settings(wire):
    client, stub = wire()

    response = client.get("/api/dashboard")

    assert response.status_code == 404
    assert response.json()["error"] == "Settings incomplete"
    assert stub.requests == []


def test_dashboard_with_settings(wire, settings_store):
    tasks = [raw_task("1", "완료", created_days_ago=3), raw_task("2", "결함"), raw_task("3", "결함")]
    client, stub = wire(lambda request: httpx.Response(200, json={"tasks": tasks}))
    client.put("/api/settings", json=SETTINGS)

    response = client.get("/api/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["tasks_total"] == 3
    assert body["metrics"]["completed_tasks"] == 1
    assert body["metrics"]["completion_rate"] == 33
    assert [group for group in body["groups"]] == ["완료", "결함"]
    assert stub.requests[0].headers["Authorization"] == "pk_123_ABC"


def test_index_page_without_settings(wire):
    client, _ = wire()

    response = client.get("/")

    assert response.status_code == 200
    assert "Settings incomplete" in response.text


def test_index_page_renders_dashboard(wire):
    tasks = [raw_task("86c2ab1234", "완료", name="Login crash", assignees=["kim"])]
    client, _ = wire(lambda request: httpx.Response(200, json={"tasks": tasks}))
    client.put("/api/settings", json=SETTINGS)

    response = client.get("/")

    assert response.status_code == 200
    assert "Login crash" in response.text
    assert "#ab1234" in response.text
    assert "kim" in response.text


def test_dashboard_skips_malformed_task(wire):
    """A task without a status is left out instead of failing the dashboard"""
    broken = raw_task("2", "결함")
    del broken["status"]
    tasks = [raw_task("1", "완료"), broken, raw_task("3", "결함")]
    client, _ = wire(lambda request: httpx.Response(200, json={"tasks": tasks}))
    client.put("/api/settings", json=SETTINGS)

    response = client.get("/api/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["tasks_total"] == 2
    assert body["metrics"]["completion_rate"] == 50
