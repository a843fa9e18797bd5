"""Builders and time constants shared by tests."""

from skycast.models.forecast import RawForecastEntry

# 2026-06-01 00:00:00 UTC, a Monday
JUNE_1_UTC = 1780272000
HOUR = 3600
DAY = 86400


def make_entry(
    timestamp: int,
    temperature: float = 20.0,
    condition: str = "Clear",
    pop: float = 0.0,
    temperature_min: float | None = None,
    temperature_max: float | None = None,
    icon: str = "01d",
) -> RawForecastEntry:
    return RawForecastEntry(
        timestamp=timestamp,
        temperature=temperature,
        temperature_min=temperature_min,
        temperature_max=temperature_max,
        condition=condition,
        icon=icon,
        precipitation_probability=pop,
    )
