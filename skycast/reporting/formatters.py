"""Output formatters for forecast views: JSON-ready dicts and CLI text."""

import json
from dataclasses import asdict

from skycast.config.schema import DisplayConfig
from skycast.forecast.timeutil import round_half_away
from skycast.models.forecast import CityInfo, DailyForecast, HourlyForecast
from skycast.models.weather import CurrentWeather, GeoLocation
from skycast.reporting.units import convert_speed, convert_temperature

UNAVAILABLE = "Forecast unavailable"


def city_to_dict(city: CityInfo) -> dict:
    return {
        "name": city.name,
        "country": city.country,
        "timezone": city.timezone_offset,
    }


def hourly_to_dicts(rows: list[HourlyForecast]) -> list[dict]:
    return [
        {
            "displayTime": r.display_time,
            "temperature": r.temperature,
            "condition": r.condition,
            "precipitationPercent": r.precipitation_percent,
            "icon": r.icon,
            "timestamp": r.timestamp,
        }
        for r in rows
    ]


def daily_to_dicts(rows: list[DailyForecast]) -> list[dict]:
    return [
        {
            "dayLabel": r.day_label,
            "dateLabel": r.date_label,
            "date": r.date,
            "condition": r.condition,
            "temperatureMin": r.temperature_min,
            "temperatureMax": r.temperature_max,
            "precipitationPercent": r.precipitation_percent,
            "icon": r.icon,
        }
        for r in rows
    ]


def current_weather_to_dict(weather: CurrentWeather) -> dict:
    data = asdict(weather)
    if data["provider_name"] is None:
        del data["provider_name"]
    return data


def geolocation_to_dict(location: GeoLocation) -> dict:
    return {
        "formatted_address": location.formatted_address,
        "geometry": {"location": {"lat": location.lat, "lng": location.lon}},
    }


def _temp(value: float, display: DisplayConfig) -> str:
    converted = convert_temperature(value, display.temperature_unit)
    return f"{round_half_away(converted)}°{display.temperature_unit}"


def format_hourly_text(rows: list[dict], display: DisplayConfig) -> str:
    """Plain text table for hourly rows as produced by hourly_to_dicts."""
    if not rows:
        return UNAVAILABLE
    lines = [f"{'Time':>6}  {'Temp':>6}  {'Rain':>4}  Condition"]
    for r in rows:
        lines.append(
            f"{r['displayTime']:>6}  {_temp(r['temperature'], display):>6}  "
            f"{r['precipitationPercent']:>3}%  {r['condition']}"
        )
    return "\n".join(lines)


def format_daily_text(rows: list[dict], display: DisplayConfig) -> str:
    """Plain text table for daily rows as produced by daily_to_dicts."""
    if not rows:
        return UNAVAILABLE
    lines = []
    for r in rows:
        lines.append(
            f"{r['dayLabel']:<9} {r['dateLabel']:<6}  "
            f"{_temp(r['temperatureMin'], display):>6} / "
            f"{_temp(r['temperatureMax'], display):<6}  "
            f"{r['precipitationPercent']:>3}%  {r['condition']}"
        )
    return "\n".join(lines)


def format_current_text(weather: dict, display: DisplayConfig) -> str:
    name = weather["name"]
    if weather.get("country"):
        name = f"{name}, {weather['country']}"
    speed = convert_speed(weather["wind_kph"], display.speed_unit)
    return "\n".join([
        name,
        f"{weather['condition']} ({weather['description']})",
        f"Temperature: {_temp(weather['temperature'], display)} "
        f"(feels like {_temp(weather['feels_like'], display)})",
        f"Humidity: {weather['humidity']}% | Wind: {speed:.1f} {display.speed_unit}",
    ])


def format_json(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
