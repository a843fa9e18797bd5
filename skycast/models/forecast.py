"""OpenWeatherMap forecast data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawForecastEntry:
    timestamp: int  # Unix seconds, UTC
    temperature: float
    temperature_min: float | None
    temperature_max: float | None
    condition: str
    icon: str
    precipitation_probability: float  # 0..1


@dataclass(frozen=True)
class CityInfo:
    name: str = ""
    country: str = ""
    timezone_offset: int = 0


@dataclass(frozen=True)
class ForecastFeed:
    entries: list[RawForecastEntry] = field(default_factory=list)
    timezone_offset: int = 0
    city: CityInfo = CityInfo()


@dataclass(frozen=True)
class HourlyForecast:
    display_time: str
    temperature: int
    condition: str
    precipitation_percent: int
    icon: str
    timestamp: int


@dataclass(frozen=True)
class DailyForecast:
    day_label: str
    date_label: str
    date: str  # YYYY-MM-DD, local
    condition: str
    temperature_min: int
    temperature_max: int
    precipitation_percent: int
    icon: str
