"""General utility functions."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# Events without an end time are treated as lasting this long
DEFAULT_EVENT_DURATION_HOURS = 3


def is_happening(start_time: datetime, end_time: Optional[datetime] = None, buffer_minutes: int = 15) -> bool:
    """
    Check if an event is currently on (used to pick heatmap hotspots).

    Args:
        start_time: Event start (timezone-aware or naive, assumed UTC if naive)
        end_time: Event end; defaults to start + DEFAULT_EVENT_DURATION_HOURS
        buffer_minutes: Minutes before start that already count as "on"

    Returns:
        bool: True if now falls inside the (buffered) event window
    """
    now = datetime.now(timezone.utc)

    start_time = to_utc(start_time)
    if end_time is None:
        end_time = start_time + timedelta(hours=DEFAULT_EVENT_DURATION_HOURS)
    else:
        end_time = to_utc(end_time)

    start_buffer = start_time - timedelta(minutes=buffer_minutes)

    return start_buffer <= now <= end_time


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)
