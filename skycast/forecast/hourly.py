"""Hourly formatter: first N feed entries as display-ready rows."""

from collections.abc import Sequence

from skycast.forecast.timeutil import (
    format_hour_label,
    local_datetime,
    round_half_away,
    to_percent,
)
from skycast.models.forecast import HourlyForecast, RawForecastEntry

DEFAULT_HOURLY_LIMIT = 8  # ~24h at 3h spacing


def format_hourly(
    entries: Sequence[RawForecastEntry],
    timezone_offset: int | None = 0,
    limit: int = DEFAULT_HOURLY_LIMIT,
) -> list[HourlyForecast]:
    """Convert the first `limit` raw entries to hourly display rows.

    No aggregation happens here; an empty feed gives an empty list.
    """
    if limit <= 0:
        return []
    return [
        HourlyForecast(
            display_time=format_hour_label(
                local_datetime(entry.timestamp, timezone_offset)
            ),
            temperature=round_half_away(entry.temperature),
            condition=entry.condition,
            precipitation_percent=to_percent(entry.precipitation_probability),
            icon=entry.icon,
            timestamp=entry.timestamp,
        )
        for entry in entries[:limit]
    ]
