"""Forecast service: fetch, parse and shape forecast views per request.

Each call is independent and holds no state between requests. Upstream
errors (httpx exceptions, UpstreamPayloadError) propagate to the caller
unchanged; no retry happens at this layer.
"""

import logging
from dataclasses import replace
from datetime import datetime

from skycast.config.schema import AppConfig
from skycast.forecast.daily import aggregate_daily
from skycast.forecast.hourly import format_hourly
from skycast.ingest.forecast_parser import (
    parse_current_weather,
    parse_forecast_feed,
    parse_geocode_results,
)
from skycast.ingest.openweather_client import OpenWeatherClient
from skycast.models.common import ForecastType
from skycast.models.weather import CurrentWeather, GeoLocation
from skycast.reporting.formatters import city_to_dict, daily_to_dicts, hourly_to_dicts

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(self, client: OpenWeatherClient, config: AppConfig):
        self.client = client
        self.config = config

    def get_forecast(
        self,
        lat: float,
        lon: float,
        forecast_type: ForecastType = ForecastType.DAILY,
        now: datetime | None = None,
    ) -> dict:
        """Return {"city": ..., "hourly": [...]} or {"city": ..., "daily": [...]}."""
        raw = self.client.get_forecast(lat, lon)
        feed = parse_forecast_feed(raw)
        logger.info(
            "Forecast feed for %.4f,%.4f: %d entries, tz offset %ds",
            lat, lon, len(feed.entries), feed.timezone_offset,
        )

        result: dict = {"city": city_to_dict(feed.city)}
        if forecast_type == ForecastType.HOURLY:
            result["hourly"] = hourly_to_dicts(
                format_hourly(
                    feed.entries,
                    feed.timezone_offset,
                    limit=self.config.forecast.hourly_limit,
                )
            )
        else:
            result["daily"] = daily_to_dicts(
                aggregate_daily(
                    feed.entries,
                    feed.timezone_offset,
                    now=now,
                    max_days=self.config.forecast.daily_max_days,
                    precipitation=self.config.forecast.precipitation_reducer,
                )
            )
        return result

    def get_current_weather(
        self,
        lat: float | None = None,
        lon: float | None = None,
        q: str | None = None,
        location_name: str | None = None,
    ) -> CurrentWeather:
        """Current conditions; `location_name` replaces the provider's city name."""
        weather = parse_current_weather(
            self.client.get_current_weather(lat=lat, lon=lon, q=q)
        )
        if location_name:
            logger.info(
                "Using searched location name %r instead of %r",
                location_name, weather.name,
            )
            weather = replace(weather, name=location_name, provider_name=weather.name)
        return weather

    def geocode(self, address: str) -> GeoLocation | None:
        """First geocoding match for a free-text address, or None."""
        results = parse_geocode_results(self.client.geocode(address, limit=1))
        return results[0] if results else None
