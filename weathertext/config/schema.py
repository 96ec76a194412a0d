"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ProviderName(StrEnum):
    OPENWEATHERMAP = "OpenWeatherMap"
    TOMORROW_IO = "Tomorrow.io"
    OPEN_METEO = "Open-Meteo"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: ProviderName
    enabled: bool = True
    api_key_env: str = ""  # empty for keyless sources
    base_url: str = ""  # empty -> adapter default
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    what3words_api_key_env: str = "WHAT3WORDS_API_KEY"
    what3words_base_url: str = "https://api.what3words.com"
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)


class GeocoderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "text-weather-service/1.0"
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)


class MessagingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    account_sid_env: str = "TWILIO_ACCOUNT_SID"
    auth_token_env: str = "TWILIO_AUTH_TOKEN"
    from_number_env: str = "TWILIO_PHONE_NUMBER"
    base_url: str = "https://api.twilio.com"
    timeout_seconds: float = Field(default=10.0, gt=0.0, le=60.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    request_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)
    dev_endpoints: bool = False


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    providers: list[ProviderConfig] = []
    # Comma-separated provider names, e.g. "Tomorrow.io,OpenWeatherMap"
    provider_priority: str | None = None
    preferred_provider: str | None = None
    location: LocationConfig = LocationConfig()
    geocoder: GeocoderConfig = GeocoderConfig()
    messaging: MessagingConfig = MessagingConfig()
    server: ServerConfig = ServerConfig()
