"""Default weather provider registrations, in failover order."""

from weathertext.config.schema import ProviderConfig, ProviderName

DEFAULT_PROVIDERS: list[ProviderConfig] = [
    ProviderConfig(
        name=ProviderName.OPENWEATHERMAP,
        api_key_env="OPENWEATHER_API_KEY",
    ),
    ProviderConfig(
        name=ProviderName.TOMORROW_IO,
        api_key_env="TOMORROW_API_KEY",
    ),
    ProviderConfig(
        name=ProviderName.OPEN_METEO,
    ),
]
