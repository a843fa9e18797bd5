"""Exception types raised by skycast outside of httpx's own errors."""


class SkycastError(Exception):
    """Base class for skycast errors."""


class MissingApiKeyError(SkycastError):
    """Raised when no OpenWeatherMap API key is configured."""


class UpstreamPayloadError(SkycastError):
    """Raised when the weather provider returns a body that is not a JSON object."""
