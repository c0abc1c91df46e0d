"""
Derived task metrics

Pure functions over an in-memory task list. Nothing here performs I/O;
"now" is injectable so results are reproducible.
"""

import math
from datetime import datetime
from typing import Dict, List, Optional, Any, Union
from clickup_dashboard.config.constants import (
    STATUS_COMPLETED,
    STATUS_DEFECT,
    STATUS_JUDGING,
    STATUS_NO_DEFECT,
    STATUS_DISPLAY_ORDER,
    STATUS_LABELS,
    STATUS_DESCRIPTIONS,
    STATUS_COLORS,
    DEFAULT_STATUS_COLOR,
    RECENT_TASK_DAYS,
    LATEST_TASKS_LIMIT,
    NORMAL_DEFECT_SHARE,
    MONTH_NAMES,
)
from clickup_dashboard.models.task import ClickUpTask
from clickup_dashboard.utils.date_utils import (
    get_current_datetime,
    parse_timestamp,
    to_millis,
    MILLIS_PER_DAY,
)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _millis(value: Optional[str]) -> int:
    """Sort key for epoch-millis strings; missing or invalid sorts as 0"""
    try:
        return int(value) if value else 0
    except (TypeError, ValueError):
        return 0


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else get_current_datetime()


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def status_counts(tasks: List[ClickUpTask]) -> Dict[str, int]:
    """
    Count tasks per status label

    Args:
        tasks: Tasks to count

    Returns:
        Status label -> count, in order of first appearance
    """
    counts: Dict[str, int] = {}
    for task in tasks:
        counts[task.status_label] = counts.get(task.status_label, 0) + 1
    return counts


def percentage(count: int, total: int, digits: Optional[int] = None) -> Union[int, str]:
    """
    Share of total as a percentage

    Args:
        count: Part
        total: Whole
        digits: None for a rounded int, otherwise a fixed-decimal string

    Returns:
        Percentage; 0 (or "0.00") when total is 0
    """
    value = (count / total) * 100 if total > 0 else 0.0
    if digits is None:
        return int(_round_half_up(value))
    return f"{_round_half_up(value, digits):.{digits}f}"


def completion_rate(tasks: List[ClickUpTask]) -> int:
    """Percentage of tasks in the completed status"""
    completed = sum(1 for task in tasks if task.status_label == STATUS_COMPLETED)
    return percentage(completed, len(tasks))


def recent_tasks(
    tasks: List[ClickUpTask],
    days: int = RECENT_TASK_DAYS,
    now: Optional[datetime] = None,
) -> List[ClickUpTask]:
    """Tasks created within the last `days` days"""
    threshold = to_millis(_now(now)) - days * MILLIS_PER_DAY
    return [task for task in tasks if _millis(task.date_created) > threshold]


def days_since(timestamp: Optional[str], now: Optional[datetime] = None) -> int:
    """
    Whole days elapsed since a timestamp, rounded up

    Args:
        timestamp: Epoch millis string
        now: Reference time

    Returns:
        Day count, 0 if the timestamp is missing or invalid
    """
    moment = parse_timestamp(timestamp)
    if moment is None:
        return 0
    elapsed = to_millis(_now(now)) - to_millis(moment)
    return math.ceil(elapsed / MILLIS_PER_DAY)


def resolution_days(task: ClickUpTask) -> int:
    """Whole days between creation and last update, rounded up"""
    created = _millis(task.date_created)
    updated = _millis(task.date_updated)
    return math.ceil((updated - created) / MILLIS_PER_DAY)


def average_age_days(tasks: List[ClickUpTask], now: Optional[datetime] = None) -> float:
    """Mean days since creation, one decimal"""
    if not tasks:
        return 0.0
    reference = _now(now)
    total = sum(days_since(task.date_created, reference) for task in tasks)
    return _round_half_up(total / len(tasks), 1)


def defect_resolution_stats(tasks: List[ClickUpTask]) -> Dict[str, float]:
    """
    Average resolution time for completed tasks

    Completed tasks updated after creation are split in list order: the
    first 70% count as normal defects, the remainder as urgent ones.

    Returns:
        {"normal_avg": float, "urgent_avg": float}
    """
    resolved = [
        task for task in tasks
        if task.status_label == STATUS_COMPLETED
        and _millis(task.date_updated) > _millis(task.date_created)
    ]
    split = math.floor(len(resolved) * NORMAL_DEFECT_SHARE)
    normal, urgent = resolved[:split], resolved[split:]

    def _average(group: List[ClickUpTask]) -> float:
        if not group:
            return 0.0
        return _round_half_up(sum(resolution_days(task) for task in group) / len(group), 1)

    return {"normal_avg": _average(normal), "urgent_avg": _average(urgent)}


def monthly_completions(tasks: List[ClickUpTask], now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Completed tasks per month of the current calendar year

    A task's completion month is taken from date_updated, falling back to
    date_created.

    Returns:
        {"year": int, "categories": [month names], "data": [12 counts]}
    """
    year = _now(now).year
    data = [0] * 12
    for task in tasks:
        if task.status_label != STATUS_COMPLETED:
            continue
        moment = parse_timestamp(task.date_updated or task.date_created)
        if moment is not None and moment.year == year:
            data[moment.month - 1] += 1
    return {"year": year, "categories": list(MONTH_NAMES), "data": data}


def monthly_creations(tasks: List[ClickUpTask], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Created tasks per month of the current calendar year"""
    year = _now(now).year
    data = [0] * 12
    for task in tasks:
        moment = parse_timestamp(task.date_created)
        if moment is not None and moment.year == year:
            data[moment.month - 1] += 1
    return {"year": year, "categories": list(MONTH_NAMES), "data": data}


def completion_trend(tasks: List[ClickUpTask], now: Optional[datetime] = None) -> Dict[str, List]:
    """
    Created vs. completed counts for the last 12 months, oldest first

    Returns:
        {"categories": ["Nov 2025", ...], "created": [...], "completed": [...]}
    """
    reference = _now(now)
    current_index = reference.year * 12 + reference.month - 1
    months = [divmod(current_index - offset, 12) for offset in range(11, -1, -1)]
    slots = {month: position for position, month in enumerate(months)}

    created = [0] * 12
    completed = [0] * 12
    for task in tasks:
        moment = parse_timestamp(task.date_created)
        if moment is not None:
            position = slots.get((moment.year, moment.month - 1))
            if position is not None:
                created[position] += 1

        if task.status_label == STATUS_COMPLETED:
            moment = parse_timestamp(task.date_updated or task.date_created)
            if moment is not None:
                position = slots.get((moment.year, moment.month - 1))
                if position is not None:
                    completed[position] += 1

    categories = [f"{MONTH_NAMES[month]} {year}" for year, month in months]
    return {"categories": categories, "created": created, "completed": completed}


def group_by_status(tasks: List[ClickUpTask]) -> Dict[str, List[ClickUpTask]]:
    """Tasks grouped by status, newest created first within each group"""
    grouped: Dict[str, List[ClickUpTask]] = {}
    for task in tasks:
        grouped.setdefault(task.status_label, []).append(task)
    for group in grouped.values():
        group.sort(key=lambda task: _millis(task.date_created), reverse=True)
    return grouped


def latest_updated(tasks: List[ClickUpTask], limit: int = LATEST_TASKS_LIMIT) -> List[ClickUpTask]:
    """Most recently updated tasks (creation date when never updated)"""
    ordered = sorted(
        tasks,
        key=lambda task: _millis(task.date_updated or task.date_created),
        reverse=True,
    )
    return ordered[:limit]


def defect_tables(tasks: List[ClickUpTask]) -> Dict[str, List[ClickUpTask]]:
    """
    Short defect lists for the dashboard

    Returns:
        normal: newest 5 tasks in the defect status
        urgent: newest 3 tasks in the defect or judging status
        resolved: 4 most recently updated no-defect or completed tasks
    """
    def _newest(statuses, key_field: str, limit: int) -> List[ClickUpTask]:
        selected = [task for task in tasks if task.status_label in statuses]
        selected.sort(key=lambda task: _millis(getattr(task, key_field)), reverse=True)
        return selected[:limit]

    return {
        "normal": _newest({STATUS_DEFECT}, "date_created", 5),
        "urgent": _newest({STATUS_DEFECT, STATUS_JUDGING}, "date_created", 3),
        "resolved": _newest({STATUS_NO_DEFECT, STATUS_COMPLETED}, "date_updated", 4),
    }


def status_overview(tasks: List[ClickUpTask]) -> List[Dict[str, Any]]:
    """Every status present with its count, share and color"""
    total = len(tasks)
    return [
        {
            "status": status,
            "count": count,
            "percentage": percentage(count, total),
            "color": status_color(status),
        }
        for status, count in status_counts(tasks).items()
    ]


def summary_table(tasks: List[ClickUpTask]) -> Dict[str, Any]:
    """
    Fixed-order status table with two-decimal percentages

    Returns:
        {"total": int, "rows": [{status, label, count, percentage, color, description}]}
    """
    total = len(tasks)
    counts = status_counts(tasks)
    rows = []
    for status in STATUS_DISPLAY_ORDER:
        count = counts.get(status, 0)
        rows.append({
            "status": status,
            "label": STATUS_LABELS.get(status, status),
            "count": count,
            "percentage": percentage(count, total, digits=2),
            "color": status_color(status),
            "description": STATUS_DESCRIPTIONS.get(status),
        })
    return {"total": total, "rows": rows}


def metric_cards(tasks: List[ClickUpTask], now: Optional[datetime] = None) -> Dict[str, int]:
    """Headline numbers: total, completed, active, recent and completion rate"""
    total = len(tasks)
    completed = status_counts(tasks).get(STATUS_COMPLETED, 0)
    return {
        "total_tasks": total,
        "completed_tasks": completed,
        "active_tasks": total - completed,
        "recent_tasks": len(recent_tasks(tasks, now=now)),
        "completion_rate": percentage(completed, total),
    }
