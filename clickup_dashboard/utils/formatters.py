"""
Display formatting utilities
"""

from typing import List, Optional
from clickup_dashboard.models.task import TaskAssignee
from clickup_dashboard.utils.date_utils import parse_timestamp


def format_date(timestamp: Optional[str], missing: str = "없음") -> str:
    """
    Format an epoch-millis timestamp as a Korean locale date

    Args:
        timestamp: Epoch millis string
        missing: Text for a missing or invalid timestamp

    Returns:
        Date like "2026. 10. 19."
    """
    moment = parse_timestamp(timestamp)
    if moment is None:
        return missing if not timestamp else str(timestamp)
    return f"{moment.year}. {moment.month:02d}. {moment.day:02d}."


def short_task_id(task_id: str) -> str:
    """Last six characters of a task id, e.g. '#86c2ab'"""
    return f"#{task_id[-6:]}"


def format_assignees(assignees: List[TaskAssignee], empty: str = "담당자 없음") -> str:
    names = [assignee.username for assignee in assignees if assignee.username]
    return ", ".join(names) if names else empty


def format_day_delta(days: float) -> str:
    """Elapsed days as shown on the dashboard cards"""
    if isinstance(days, float):
        return f"+{days:.1f}Day"
    return f"+{days}Day"
