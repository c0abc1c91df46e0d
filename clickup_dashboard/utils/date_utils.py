"""
Centralized date/time utilities for the dashboard timezone (UTC+9)
ClickUp timestamps are epoch milliseconds sent as strings
"""

from datetime import datetime, timezone, timedelta
from typing import Optional, Union
from clickup_dashboard.config.constants import USER_TIMEZONE_OFFSET

# Singleton timezone object
USER_TIMEZONE = timezone(timedelta(hours=USER_TIMEZONE_OFFSET))

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def get_current_datetime() -> datetime:
    """
    Get current datetime in UTC+9 timezone

    Returns:
        Current datetime object with UTC+9 timezone
    """
    return datetime.now(USER_TIMEZONE)


def get_current_utc_iso() -> str:
    """Current UTC time as ISO 8601 string with milliseconds, e.g. 2026-10-19T03:12:45.120Z"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_timestamp(value: Union[str, int, float, None]) -> Optional[datetime]:
    """
    Parse a ClickUp epoch-millis timestamp into an aware datetime

    Args:
        value: Epoch millis as string or number

    Returns:
        Datetime in UTC+9, or None if value is missing or not numeric
    """
    if value is None or value == "":
        return None

    try:
        millis = int(value)
    except (TypeError, ValueError):
        return None

    try:
        return datetime.fromtimestamp(millis / 1000, tz=USER_TIMEZONE)
    except (OverflowError, OSError, ValueError):
        return None


def to_millis(dt: datetime) -> int:
    """Convert datetime to epoch millis (naive values are taken as UTC+9)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=USER_TIMEZONE)
    return int(dt.timestamp() * 1000)
