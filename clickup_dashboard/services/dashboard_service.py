"""
Dashboard service
"""

from datetime import datetime
from typing import Dict, Any, List, Optional
from pydantic import ValidationError as PydanticValidationError
from clickup_dashboard.services.proxy_service import ProxyService
from clickup_dashboard.services.settings_store import SettingsStore
from clickup_dashboard.services import task_metrics
from clickup_dashboard.models.task import ClickUpTask
from clickup_dashboard.utils.date_utils import get_current_datetime
from clickup_dashboard.utils.error_handler import SettingsNotFoundError
from clickup_dashboard.utils.logger import logger


class DashboardService:
    """Fetches tasks with the stored settings and derives every dashboard metric"""

    def __init__(self, proxy_service: ProxyService, settings_store: SettingsStore):
        """
        Initialize dashboard service

        Args:
            proxy_service: Service used to fetch tasks from ClickUp
            settings_store: Stored credentials and list id
        """
        self.proxy = proxy_service
        self.settings_store = settings_store
        self.logger = logger

    def _parse_tasks(self, raw_tasks: List[Dict[str, Any]]) -> List[ClickUpTask]:
        """Convert upstream task dicts, skipping any that do not fit the task model"""
        tasks = []
        for raw in raw_tasks:
            try:
                tasks.append(ClickUpTask.from_api(raw))
            except PydanticValidationError as e:
                task_id = raw.get("id") if isinstance(raw, dict) else None
                self.logger.warning(
                    f"[DashboardService] Skipping malformed task {task_id}: {e.error_count()} validation error(s)"
                )
        return tasks

    async def build_dashboard(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Build the dashboard payload

        Args:
            now: Reference time for day/month based metrics

        Returns:
            Dict with tasks_total, metrics, statuses, summary, monthly,
            trend, recent, defects, age, resolution and groups

        Raises:
            SettingsNotFoundError: If no API key and list id are stored
        """
        stored = self.settings_store.load()
        if stored is None or not stored.is_complete():
            raise SettingsNotFoundError(
                "Settings incomplete",
                details="Save an API key and list ID via /api/settings first",
            )

        now = now or get_current_datetime()
        self.logger.info(f"[DashboardService] Building dashboard for list {stored.list_id}")

        payload = await self.proxy.fetch_list_tasks(
            api_key=stored.api_key,
            list_id=stored.list_id,
            fetch_all_pages=stored.fetch_all_pages,
        )
        tasks = self._parse_tasks(payload["tasks"])

        return {
            "tasks_total": len(tasks),
            "pages_processed": payload["pagesProcessed"],
            "metrics": task_metrics.metric_cards(tasks, now=now),
            "statuses": task_metrics.status_overview(tasks),
            "summary": task_metrics.summary_table(tasks),
            "monthly": {
                "completed": task_metrics.monthly_completions(tasks, now=now),
                "created": task_metrics.monthly_creations(tasks, now=now),
            },
            "trend": task_metrics.completion_trend(tasks, now=now),
            "recent": task_metrics.latest_updated(tasks),
            "defects": task_metrics.defect_tables(tasks),
            "age": task_metrics.average_age_days(tasks, now=now),
            "resolution": task_metrics.defect_resolution_stats(tasks),
            "groups": task_metrics.group_by_status(tasks),
        }
