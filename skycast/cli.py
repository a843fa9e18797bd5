"""CLI entry point for skycast."""

import argparse
import logging

import httpx

from skycast.config.loader import (
    DEFAULT_CONFIG_PATH,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from skycast.config.schema import AppConfig
from skycast.errors import SkycastError
from skycast.forecast.service import ForecastService
from skycast.ingest.openweather_client import OpenWeatherClient
from skycast.models.common import ForecastType
from skycast.reporting.formatters import (
    current_weather_to_dict,
    format_current_text,
    format_daily_text,
    format_hourly_text,
    format_json,
)

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Weather forecasts from OpenWeatherMap",
    )
    parser.add_argument(
        "--config", default=str(DEFAULT_CONFIG_PATH), help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Show hourly or daily forecast")
    fc_p.add_argument("--lat", type=float, required=True)
    fc_p.add_argument("--lon", type=float, required=True)
    fc_p.add_argument(
        "--type", dest="forecast_type",
        choices=[t.value for t in ForecastType], default=ForecastType.DAILY.value,
    )
    fc_p.add_argument("--json", action="store_true", help="Print JSON")

    # weather
    wx_p = sub.add_parser("weather", help="Show current conditions")
    wx_p.add_argument("--lat", type=float)
    wx_p.add_argument("--lon", type=float)
    wx_p.add_argument("--q", help="City name, e.g. 'London,GB'")
    wx_p.add_argument("--name", help="Display name override")
    wx_p.add_argument("--json", action="store_true", help="Print JSON")

    # geocode
    geo_p = sub.add_parser("geocode", help="Resolve an address to coordinates")
    geo_p.add_argument("address")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)

    try:
        service = _build_service(config)
        if args.command == "forecast":
            return _cmd_forecast(service, config, args)
        elif args.command == "weather":
            return _cmd_weather(service, config, args)
        elif args.command == "geocode":
            return _cmd_geocode(service, args)
    except httpx.HTTPStatusError as e:
        print(f"Error: weather provider returned {e.response.status_code}")
        return 1
    except (httpx.RequestError, SkycastError) as e:
        print(f"Error: {e}")
        return 1

    parser.print_help()
    return 1


def _build_service(config: AppConfig) -> ForecastService:
    provider = config.provider
    client = OpenWeatherClient(
        api_key=provider.api_key,
        base_url=provider.base_url,
        timeout=provider.timeout_seconds,
        max_retries=provider.max_retries,
        retry_base_delay=provider.retry_base_delay,
    )
    return ForecastService(client, config)


def _cmd_forecast(service: ForecastService, config: AppConfig, args) -> int:
    kind = ForecastType(args.forecast_type)
    result = service.get_forecast(args.lat, args.lon, kind)
    if args.json:
        print(format_json(result))
        return 0

    city = result["city"]
    if city["name"]:
        print(f"{city['name']}, {city['country']}" if city["country"] else city["name"])
    if kind == ForecastType.HOURLY:
        print(format_hourly_text(result["hourly"], config.display))
    else:
        print(format_daily_text(result["daily"], config.display))
    return 0


def _cmd_weather(service: ForecastService, config: AppConfig, args) -> int:
    if args.lat is not None and args.lon is not None:
        weather = service.get_current_weather(
            lat=args.lat, lon=args.lon, location_name=args.name
        )
    elif args.q:
        weather = service.get_current_weather(q=args.q, location_name=args.name)
    else:
        print("Error: use --lat/--lon or --q")
        return 1

    data = current_weather_to_dict(weather)
    if args.json:
        print(format_json(data))
    else:
        print(format_current_text(data, config.display))
    return 0


def _cmd_geocode(service: ForecastService, args) -> int:
    location = service.geocode(args.address)
    if location is None:
        print(f"Location not found: {args.address}")
        return 1
    print(f"{location.formatted_address}: {location.lat:.4f}, {location.lon:.4f}")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        data = config.model_copy(deep=True)
        if data.provider.api_key:
            data.provider.api_key = "***"
        print(data.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            save_config(new_config, args.config)
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info("Starting API on %s:%d", host, port)
    uvicorn.run("skycast.api:app", host=host, port=port)
    return 0
