"""OpenWeatherMap API client with retry and rate limit handling."""

import logging
import time

import httpx

from skycast.config.schema import OPENWEATHER_BASE_URL
from skycast.errors import MissingApiKeyError, UpstreamPayloadError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "skycast/0.1.0"
FORECAST_PATH = "/data/2.5/forecast"
WEATHER_PATH = "/data/2.5/weather"
GEOCODE_PATH = "/geo/1.0/direct"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        units: str = "metric",
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if not api_key:
            raise MissingApiKeyError("OpenWeatherMap API key is missing")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.units = units
        self.user_agent = user_agent

    def get_forecast(self, lat: float, lon: float) -> dict:
        """Fetch the 5-day / 3-hour forecast feed for a coordinate."""
        return self._get(FORECAST_PATH, {"lat": lat, "lon": lon})

    def get_current_weather(
        self,
        lat: float | None = None,
        lon: float | None = None,
        q: str | None = None,
    ) -> dict:
        """Fetch current conditions by coordinates, or by city name via `q`."""
        if lat is not None and lon is not None:
            params: dict = {"lat": lat, "lon": lon}
        elif q:
            params = {"q": q}
        else:
            raise ValueError("Either lat/lon or q is required")
        return self._get(WEATHER_PATH, params)

    def geocode(self, address: str, limit: int = 1) -> list[dict]:
        """Resolve a free-text address via the direct geocoding endpoint."""
        return self._get(GEOCODE_PATH, {"q": address, "limit": limit}, expect=list)

    def _get(self, path: str, params: dict, expect: type = dict):
        """GET with exponential backoff on 503/429 and transport errors."""
        url = f"{self.base_url}{path}"
        query = {**params, "appid": self.api_key}
        if path != GEOCODE_PATH:
            query["units"] = self.units
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, params=query, headers=headers, timeout=self.timeout)
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        path, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return _decode(resp, path, expect)
            except httpx.RequestError as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        assert last_error is not None
        raise last_error


def _decode(resp: httpx.Response, path: str, expect: type):
    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamPayloadError(f"Non-JSON response from {path}") from e
    if not isinstance(data, expect):
        raise UpstreamPayloadError(
            f"Unexpected payload from {path}: {type(data).__name__}"
        )
    logger.debug("OpenWeatherMap %s -> %d", path, resp.status_code)
    return data
