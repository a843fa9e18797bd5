"""Current conditions and geocoding models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentWeather:
    name: str
    country: str
    condition: str
    description: str
    icon: str
    temperature: float
    feels_like: float
    humidity: int
    wind_kph: float
    pressure: int
    visibility: int
    lat: float
    lon: float
    timezone_offset: int
    provider_name: str | None = None  # set when the display name was overridden


@dataclass(frozen=True)
class GeoLocation:
    name: str
    state: str
    country: str
    lat: float
    lon: float

    @property
    def formatted_address(self) -> str:
        return ", ".join(p for p in (self.name, self.state, self.country) if p)
