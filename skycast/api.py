"""Skycast HTTP API: forecast, current weather and geocoding endpoints."""

import logging
import os

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skycast.config.loader import DEFAULT_CONFIG_PATH, load_config
from skycast.config.schema import AppConfig
from skycast.errors import MissingApiKeyError, UpstreamPayloadError
from skycast.forecast.service import ForecastService
from skycast.ingest.openweather_client import OpenWeatherClient
from skycast.models.common import ForecastType, utc_now_iso
from skycast.reporting.formatters import current_weather_to_dict, geolocation_to_dict

logger = logging.getLogger(__name__)

CONFIG_ENV = "SKYCAST_CONFIG"

CONFIG: AppConfig = load_config(os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))

app = FastAPI(title="Skycast", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.server.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def get_config() -> AppConfig:
    return CONFIG


def get_service(config: AppConfig = Depends(get_config)) -> ForecastService:
    provider = config.provider
    client = OpenWeatherClient(
        api_key=provider.api_key,
        base_url=provider.base_url,
        timeout=provider.timeout_seconds,
        max_retries=provider.max_retries,
        retry_base_delay=provider.retry_base_delay,
    )
    return ForecastService(client, config)


class ApiError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _coordinate(name: str, value: str | None) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ApiError(f"Invalid {name}: {value!r}") from None


# ── Error mapping ───────────────────────────────────────────────


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(MissingApiKeyError)
async def missing_key_handler(request: Request, exc: MissingApiKeyError):
    logger.error("Weather API key is missing")
    return JSONResponse(status_code=500, content={"error": "API key is missing"})


@app.exception_handler(httpx.HTTPStatusError)
async def upstream_status_handler(request: Request, exc: httpx.HTTPStatusError):
    status = exc.response.status_code
    logger.error("Weather provider responded %d for %s", status, request.url.path)
    try:
        details = exc.response.json()
    except ValueError:
        details = exc.response.text
    return JSONResponse(
        status_code=502,
        content={
            "error": "Error from weather provider",
            "upstream_status": status,
            "details": details,
        },
    )


@app.exception_handler(httpx.RequestError)
async def upstream_request_handler(request: Request, exc: httpx.RequestError):
    logger.error("Weather provider request failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"error": "Failed to fetch weather data", "message": str(exc)},
    )


@app.exception_handler(UpstreamPayloadError)
async def upstream_payload_handler(request: Request, exc: UpstreamPayloadError):
    logger.error("Malformed provider payload for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"error": "Failed to fetch weather data", "message": str(exc)},
    )


# ── Data endpoints ──────────────────────────────────────────────


@app.get("/api/forecast")
def get_forecast(
    lat: str | None = None,
    lon: str | None = None,
    forecast_type: str = ForecastType.DAILY.value,
    service: ForecastService = Depends(get_service),
):
    """Hourly or daily forecast for a coordinate."""
    if not lat or not lon:
        raise ApiError("Latitude and longitude are required")
    try:
        kind = ForecastType(forecast_type)
    except ValueError:
        raise ApiError(
            f"forecast_type must be one of: {', '.join(t.value for t in ForecastType)}"
        ) from None
    return service.get_forecast(
        _coordinate("latitude", lat), _coordinate("longitude", lon), kind
    )


@app.get("/api/weather")
def get_weather(
    lat: str | None = None,
    lon: str | None = None,
    q: str | None = None,
    originalLocationName: str | None = None,
    service: ForecastService = Depends(get_service),
):
    """Current conditions by coordinate or city name."""
    if lat and lon:
        weather = service.get_current_weather(
            lat=_coordinate("latitude", lat),
            lon=_coordinate("longitude", lon),
            location_name=originalLocationName,
        )
    elif q:
        weather = service.get_current_weather(q=q, location_name=originalLocationName)
    else:
        raise ApiError("Missing required parameters: lat & lon or q")
    logger.info("Fetched current weather for %s", weather.name)
    return current_weather_to_dict(weather)


@app.get("/api/geocode")
def geocode(
    address: str | None = None,
    service: ForecastService = Depends(get_service),
):
    """Resolve an address to coordinates."""
    if not address:
        raise ApiError("Address parameter is required")
    location = service.geocode(address)
    if location is None:
        raise ApiError("Location not found", status_code=404)
    return {"results": [geolocation_to_dict(location)], "status": "OK"}


@app.get("/api/health")
def get_health(config: AppConfig = Depends(get_config)):
    """Quick health check."""
    return {
        "status": "ok",
        "api_key_configured": bool(config.provider.api_key),
        "timestamp": utc_now_iso(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=CONFIG.server.host, port=CONFIG.server.port)
