"""Timestamp, timezone and rounding helpers for forecast display.

Local wall-clock time is obtained by shifting the UTC timestamp by the
location's fixed offset and reading the result as if it were UTC. The
offset is constant for the whole feed; DST transitions are not modeled.
"""

import math
from datetime import UTC, date, datetime

WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
)
MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def local_datetime(timestamp: int, timezone_offset: int | None = 0) -> datetime:
    """Wall-clock datetime at the location (tz-aware, but tagged UTC)."""
    return datetime.fromtimestamp(timestamp + (timezone_offset or 0), tz=UTC)


def local_date_key(timestamp: int, timezone_offset: int | None = 0) -> str:
    return local_datetime(timestamp, timezone_offset).date().isoformat()


def local_today(timezone_offset: int | None = 0, now: datetime | None = None) -> date:
    """Current calendar date at the location."""
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return local_datetime(int(now.timestamp()), timezone_offset).date()


def format_hour_label(dt: datetime) -> str:
    """12-hour clock label: 0 -> '12 AM', 13 -> '1 PM'."""
    hour = dt.hour
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"


def format_date_label(dt: datetime | date) -> str:
    return f"{MONTHS[dt.month - 1]} {dt.day}"


def weekday_name(dt: datetime | date) -> str:
    return WEEKDAYS[dt.weekday()]


def round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero (-2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # compare the exact fraction; adding 0.5 first rounds up just below a half
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def to_percent(probability: float) -> int:
    return min(100, max(0, round_half_away(probability * 100)))
