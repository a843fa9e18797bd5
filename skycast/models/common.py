"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class ForecastType(StrEnum):
    HOURLY = "hourly"
    DAILY = "daily"


class PrecipitationReducer(StrEnum):
    MEAN = "mean"
    MAX = "max"


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class SpeedUnit(StrEnum):
    KPH = "kph"
    MPH = "mph"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
