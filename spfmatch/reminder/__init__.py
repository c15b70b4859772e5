"""
SPFMatch Reminder

UV index + Fitzpatrick type -> reapplication interval and countdown.
"""

from .intervals import (
    REAPPLICATION_TIME_TABLE,
    UV_BUCKETS,
    uv_bucket,
    recommended_interval_minutes,
    uv_level,
    timer_needed,
)
from .uv_client import (
    Coordinates,
    UVReading,
    UVIndexError,
    LocationUnavailableError,
    fetch_uv_index,
    get_uv_reading,
    get_uv_reading_async,
    resolve_uv_index,
)
from .notifications import Notifier, LoggingNotifier, PermissionGatedNotifier, NotificationPermission
from .timer import ReapplicationTimer, TimerState, StartOutcome, TimerSnapshot, format_time

__all__ = [
    "REAPPLICATION_TIME_TABLE",
    "UV_BUCKETS",
    "uv_bucket",
    "recommended_interval_minutes",
    "uv_level",
    "timer_needed",
    "Coordinates",
    "UVReading",
    "UVIndexError",
    "LocationUnavailableError",
    "fetch_uv_index",
    "get_uv_reading",
    "get_uv_reading_async",
    "resolve_uv_index",
    "Notifier",
    "LoggingNotifier",
    "PermissionGatedNotifier",
    "NotificationPermission",
    "ReapplicationTimer",
    "TimerState",
    "StartOutcome",
    "TimerSnapshot",
    "format_time",
]
