"""Daily aggregator: bucket the 5-day/3-hour feed into local calendar days.

Groups keep first-seen order, which is chronological because the feed is
time-ordered. They are never re-sorted.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from statistics import fmean

from skycast.forecast.timeutil import (
    format_date_label,
    local_date_key,
    local_datetime,
    local_today,
    round_half_away,
    to_percent,
    weekday_name,
)
from skycast.models.common import PrecipitationReducer
from skycast.models.forecast import DailyForecast, RawForecastEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_DAYS = 7


def aggregate_daily(
    entries: Sequence[RawForecastEntry],
    timezone_offset: int | None = 0,
    now: datetime | None = None,
    max_days: int = DEFAULT_MAX_DAYS,
    precipitation: PrecipitationReducer = PrecipitationReducer.MEAN,
) -> list[DailyForecast]:
    """Reduce raw entries to at most `max_days` per-day summaries.

    `now` pins the reference instant used for the "Today"/"Tomorrow" labels;
    it defaults to the current time.
    """
    offset = timezone_offset or 0
    groups = group_by_local_day(entries, offset)

    today = local_today(offset, now)
    today_key = today.isoformat()
    tomorrow_key = (today + timedelta(days=1)).isoformat()

    days: list[DailyForecast] = []
    for date_key, group in list(groups.items())[:max_days]:
        first_local = local_datetime(group[0].timestamp, offset)
        condition, icon = representative_condition(group)
        if date_key == today_key:
            day_label = "Today"
        elif date_key == tomorrow_key:
            day_label = "Tomorrow"
        else:
            day_label = weekday_name(first_local)

        days.append(
            DailyForecast(
                day_label=day_label,
                date_label=format_date_label(first_local),
                date=date_key,
                condition=condition,
                temperature_min=round_half_away(min(_entry_min(e) for e in group)),
                temperature_max=round_half_away(max(_entry_max(e) for e in group)),
                precipitation_percent=_reduce_precipitation(group, precipitation),
                icon=icon,
            )
        )

    if len(groups) > max_days:
        logger.debug(
            "Dropped %d day(s) beyond the %d-day window",
            len(groups) - max_days, max_days,
        )
    return days


def group_by_local_day(
    entries: Sequence[RawForecastEntry], timezone_offset: int | None = 0
) -> dict[str, list[RawForecastEntry]]:
    """Group entries under their local ISO date, in first-seen order."""
    groups: dict[str, list[RawForecastEntry]] = {}
    for entry in entries:
        key = local_date_key(entry.timestamp, timezone_offset)
        groups.setdefault(key, []).append(entry)
    return groups


def representative_condition(group: Sequence[RawForecastEntry]) -> tuple[str, str]:
    """Most frequent condition and its first icon.

    Ties go to the condition seen first: dicts keep insertion order and only
    a strictly higher count replaces the current pick.
    """
    counts: dict[str, int] = {}
    icons: dict[str, str] = {}
    for entry in group:
        counts[entry.condition] = counts.get(entry.condition, 0) + 1
        icons.setdefault(entry.condition, entry.icon)

    best, best_count = "", 0
    for condition, count in counts.items():
        if count > best_count:
            best, best_count = condition, count
    return best, icons.get(best, "")


def _entry_max(entry: RawForecastEntry) -> float:
    if entry.temperature_max is None:
        return entry.temperature
    return entry.temperature_max


def _entry_min(entry: RawForecastEntry) -> float:
    if entry.temperature_min is None:
        return entry.temperature
    return entry.temperature_min


def _reduce_precipitation(
    group: Sequence[RawForecastEntry], reducer: PrecipitationReducer
) -> int:
    probabilities = [e.precipitation_probability for e in group]
    if reducer == PrecipitationReducer.MAX:
        return to_percent(max(probabilities))
    return to_percent(fmean(probabilities))
