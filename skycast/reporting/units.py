"""Display unit conversion. Applied after the pipeline, never inside it."""

from skycast.models.common import SpeedUnit, TemperatureUnit

KPH_TO_MPH = 0.621371


def convert_temperature(celsius: float, unit: TemperatureUnit) -> float:
    if unit == TemperatureUnit.FAHRENHEIT:
        return celsius * 9 / 5 + 32
    return celsius


def convert_speed(kph: float, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.MPH:
        return kph * KPH_TO_MPH
    return kph
