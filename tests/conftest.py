"""
Pytest configuration and fixtures
"""

import pytest
from datetime import datetime, timedelta
from typing import Callable, List
import httpx
from clickup_dashboard.api.clickup_client import ClickUpClient
from clickup_dashboard.services.proxy_service import ProxyService
from clickup_dashboard.services.settings_store import SettingsStore
from clickup_dashboard.services.dashboard_service import DashboardService
from clickup_dashboard.models.task import ClickUpTask
from clickup_dashboard.utils.date_utils import USER_TIMEZONE, to_millis


NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=USER_TIMEZONE)


def millis_ago(days: float, now: datetime = NOW) -> str:
    """Epoch-millis string `days` before now"""
    return str(to_millis(now - timedelta(days=days)))


def raw_task(
    task_id: str,
    status: str = "미확인",
    created_days_ago: float = 1,
    updated_days_ago: float = None,
    name: str = None,
    assignees: List[str] = None,
) -> dict:
    """Task dict shaped like a ClickUp API response"""
    if updated_days_ago is None:
        updated_days_ago = created_days_ago
    return {
        "id": task_id,
        "name": name or f"Task {task_id}",
        "status": {"status": status, "color": "#d3d3d3", "type": "custom", "orderindex": 0},
        "assignees": [{"id": i, "username": username} for i, username in enumerate(assignees or [])],
        "date_created": millis_ago(created_days_ago),
        "date_updated": millis_ago(updated_days_ago),
        "priority": None,
        "tags": [],
        "url": f"https://app.clickup.com/t/{task_id}",
    }


def page_of(count: int, start: int = 0) -> dict:
    """One ClickUp task page with `count` tasks"""
    return {"tasks": [raw_task(str(start + i)) for i in range(count)], "last_page": False}


class StubClickUp:
    """Records requests and answers them with a handler"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def pages_requested(self) -> List[int]:
        return [int(request.url.params["page"]) for request in self.requests if "page" in request.url.params]


@pytest.fixture
def now():
    """Fixed reference time"""
    return NOW


@pytest.fixture
def task_factory():
    """Build ClickUpTask models"""
    def _make(task_id: str, status: str = "미확인", **kwargs) -> ClickUpTask:
        return ClickUpTask.from_api(raw_task(task_id, status, **kwargs))
    return _make


@pytest.fixture
def stub_factory():
    """Build a ClickUp client whose network calls go to a stub handler"""
    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        stub = StubClickUp(handler)
        client = ClickUpClient(transport=httpx.MockTransport(stub), page_delay=0)
        return client, stub
    return _make


@pytest.fixture
def settings_store(tmp_path):
    """Settings store with temporary file"""
    return SettingsStore(storage_file=str(tmp_path / "settings.json"))


@pytest.fixture
def services(stub_factory, settings_store):
    """Wire proxy and dashboard services around a stub handler"""
    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        client, stub = stub_factory(handler)
        proxy = ProxyService(client)
        dashboard = DashboardService(proxy, settings_store)
        return proxy, dashboard, stub
    return _make
