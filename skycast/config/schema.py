"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from skycast.models.common import PrecipitationReducer, SpeedUnit, TemperatureUnit

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    hourly_limit: int = Field(default=8, ge=1, le=40)
    daily_max_days: int = Field(default=7, ge=1, le=7)
    precipitation_reducer: PrecipitationReducer = PrecipitationReducer.MEAN


class DisplayConfig(BaseModel):
    """Presentation preferences. The forecast pipeline always works in metric."""

    model_config = {"extra": "forbid"}

    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    speed_unit: SpeedUnit = SpeedUnit.KPH


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    forecast: ForecastConfig = ForecastConfig()
    display: DisplayConfig = DisplayConfig()
    server: ServerConfig = ServerConfig()
