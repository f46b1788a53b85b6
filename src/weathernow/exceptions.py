"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class WeatherError(Exception):
    """Base for failures that end a fetch cycle."""

    label = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def display_message(self) -> str:
        """Message shown to the user for this failure."""
        return f"{self.label}: {self.message}"


class NetworkError(WeatherError):
    """Raised for transport failures and non-200 responses."""

    label = "Network error"


class LocationError(WeatherError):
    """Raised when a coordinate or place name cannot be resolved."""

    label = "Location error"


class DecodingError(WeatherError):
    """Raised when a response body does not decode to the forecast schema."""

    label = "Data error"


class InvalidResponseError(WeatherError):
    """Raised for unusable requests or payloads of the wrong shape."""

    label = "Invalid response"
