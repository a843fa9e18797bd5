"""Parse raw OpenWeatherMap payloads into typed models.

Malformed fields are defaulted or skipped here so the aggregation code only
ever sees well-formed entries.
"""

import logging
import math
from typing import Any

from skycast.models.forecast import CityInfo, ForecastFeed, RawForecastEntry
from skycast.models.weather import CurrentWeather, GeoLocation

logger = logging.getLogger(__name__)

UNKNOWN_CONDITION = "Unknown"
MS_TO_KPH = 3.6
# 9999-12-31 00:00 UTC; later instants cannot be shifted into a datetime
MAX_TIMESTAMP = 253402214400
MAX_OFFSET = 86400


def parse_forecast_feed(raw: dict) -> ForecastFeed:
    """Build a ForecastFeed from a /data/2.5/forecast response body.

    A missing `list` gives an empty feed; a missing or non-integer
    `city.timezone` gives offset 0.
    """
    city_raw = _mapping(raw.get("city"))
    offset = _parse_offset(city_raw.get("timezone"))

    items = raw.get("list")
    if not isinstance(items, list):
        if items is not None:
            logger.warning("Forecast 'list' is %s, expected list", type(items).__name__)
        items = []

    entries: list[RawForecastEntry] = []
    skipped = 0
    for item in items:
        entry = _parse_entry(item)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        logger.warning("Skipped %d malformed forecast entries of %d", skipped, len(items))

    return ForecastFeed(
        entries=entries,
        timezone_offset=offset,
        city=CityInfo(
            name=str(city_raw.get("name") or ""),
            country=str(city_raw.get("country") or ""),
            timezone_offset=offset,
        ),
    )


def _parse_entry(item: Any) -> RawForecastEntry | None:
    if not isinstance(item, dict):
        return None
    main = _mapping(item.get("main"))
    try:
        timestamp = int(item["dt"])
    except (KeyError, TypeError, ValueError, OverflowError):
        return None
    if not 0 <= timestamp < MAX_TIMESTAMP:
        return None
    temperature = _optional_float(main.get("temp"))
    if temperature is None:
        return None

    condition, icon = _first_weather(item.get("weather"))
    return RawForecastEntry(
        timestamp=timestamp,
        temperature=temperature,
        temperature_min=_optional_float(main.get("temp_min")),
        temperature_max=_optional_float(main.get("temp_max")),
        condition=condition,
        icon=icon,
        precipitation_probability=_clamp_probability(item.get("pop")),
    )


def parse_current_weather(raw: dict) -> CurrentWeather:
    """Build CurrentWeather from a /data/2.5/weather response body."""
    main = _mapping(raw.get("main"))
    wind = _mapping(raw.get("wind"))
    coord = _mapping(raw.get("coord"))
    sys_info = _mapping(raw.get("sys"))
    condition, icon = _first_weather(raw.get("weather"))
    description = ""
    if condition != UNKNOWN_CONDITION:
        description = str(raw["weather"][0].get("description") or "")

    return CurrentWeather(
        name=str(raw.get("name") or ""),
        country=str(sys_info.get("country") or ""),
        condition=condition,
        description=description,
        icon=icon,
        temperature=_optional_float(main.get("temp")) or 0.0,
        feels_like=_optional_float(main.get("feels_like")) or 0.0,
        humidity=_optional_int(main.get("humidity")) or 0,
        wind_kph=round((_optional_float(wind.get("speed")) or 0.0) * MS_TO_KPH, 1),
        pressure=_optional_int(main.get("pressure")) or 0,
        visibility=_optional_int(raw.get("visibility")) or 0,
        lat=_optional_float(coord.get("lat")) or 0.0,
        lon=_optional_float(coord.get("lon")) or 0.0,
        timezone_offset=_parse_offset(raw.get("timezone")),
    )


def parse_geocode_results(raw: list) -> list[GeoLocation]:
    """Build GeoLocations from a /geo/1.0/direct response, skipping bad rows."""
    results: list[GeoLocation] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        lat = _optional_float(item.get("lat"))
        lon = _optional_float(item.get("lon"))
        if lat is None or lon is None:
            continue
        results.append(
            GeoLocation(
                name=str(item.get("name") or ""),
                state=str(item.get("state") or ""),
                country=str(item.get("country") or ""),
                lat=lat,
                lon=lon,
            )
        )
    return results


def _first_weather(weather: Any) -> tuple[str, str]:
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        return UNKNOWN_CONDITION, ""
    first = weather[0]
    return str(first.get("main") or UNKNOWN_CONDITION), str(first.get("icon") or "")


def _parse_offset(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and abs(value) <= MAX_OFFSET:
        return value
    return 0


def _optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _clamp_probability(value: Any) -> float:
    p = _optional_float(value)
    if p is None:
        return 0.0
    return min(1.0, max(0.0, p))


def _optional_int(value: Any) -> int | None:
    f = _optional_float(value)
    return None if f is None else int(f)


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}
