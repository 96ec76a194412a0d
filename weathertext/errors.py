"""Exception taxonomy for location parsing, weather providers and delivery."""


class WeatherTextError(Exception):
    """Base class for every error raised by weathertext."""


# --- Location parsing ---


class LocationError(WeatherTextError):
    """Input looked like a location but could not be turned into coordinates.

    Messages are user-displayable and are sent back verbatim.
    """


class LocationFormatError(LocationError):
    """Input matched a recognised shape but failed validation."""


class LocationLookupError(LocationError):
    """A three-word address could not be resolved by the remote service."""


# --- Weather providers ---


class ProviderError(WeatherTextError):
    """A single weather provider failed. Never escapes the provider manager."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class ProviderTimeoutError(ProviderError):
    def __init__(self, provider: str):
        super().__init__(provider, "Weather provider timeout - please try again")


class ProviderResponseError(ProviderError):
    def __init__(self, provider: str, status: int, detail: str | None = None):
        super().__init__(
            provider, f"Weather provider error: {status} - {detail or 'Unknown error'}"
        )
        self.status = status
        self.detail = detail


class ProviderGenericError(ProviderError):
    def __init__(
        self,
        provider: str,
        detail: str = "Unable to fetch weather data - please try again",
    ):
        super().__init__(provider, detail)
        self.detail = detail


class ProviderUnavailableError(ProviderError):
    """Recorded when an explicitly preferred provider fails its availability probe."""

    def __init__(self, provider: str):
        super().__init__(provider, "Weather provider unavailable")


class AllProvidersFailedError(WeatherTextError):
    """Every registered, available provider failed for one request."""

    def __init__(self, errors: list[tuple[str, Exception]]):
        self.errors = list(errors)
        if self.errors:
            detail = "; ".join(f"{name}: {exc}" for name, exc in self.errors)
        else:
            detail = "no weather provider was available"
        super().__init__(f"Unable to fetch weather data: {detail}")


# --- Outbound delivery ---


class DeliveryError(WeatherTextError):
    """Raised when an outbound reply could not be transmitted."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
