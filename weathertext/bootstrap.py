"""Build providers, resolver, messenger and handler from an AppConfig."""

import logging
import os
from collections.abc import Mapping

from weathertext.config.schema import AppConfig, ProviderConfig, ProviderName
from weathertext.errors import DeliveryError
from weathertext.ingest.reverse_geocoder import NominatimReverseGeocoder
from weathertext.ingest.what3words_client import What3WordsClient
from weathertext.messaging.twilio_client import TwilioClient
from weathertext.providers.base import WeatherProvider
from weathertext.providers.open_meteo import OpenMeteoProvider
from weathertext.providers.openweathermap import OpenWeatherMapProvider
from weathertext.providers.tomorrowio import TomorrowIOProvider
from weathertext.services.message_handler import MessageHandler
from weathertext.services.weather_manager import WeatherProviderManager

logger = logging.getLogger(__name__)


def _build_provider(
    pc: ProviderConfig, api_key: str, geocoder: NominatimReverseGeocoder
) -> WeatherProvider:
    url = {"base_url": pc.base_url} if pc.base_url else {}
    if pc.name == ProviderName.OPENWEATHERMAP:
        return OpenWeatherMapProvider(api_key, timeout=pc.timeout_seconds, **url)
    if pc.name == ProviderName.TOMORROW_IO:
        return TomorrowIOProvider(api_key, geocoder=geocoder, timeout=pc.timeout_seconds, **url)
    if pc.name == ProviderName.OPEN_METEO:
        return OpenMeteoProvider(geocoder=geocoder, timeout=pc.timeout_seconds, **url)
    raise ValueError(f"Unsupported weather provider: {pc.name}")


def build_providers(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> list[WeatherProvider]:
    """Instantiate enabled providers in registration order.

    Providers whose API key variable is unset are skipped with a warning.
    """
    environ = os.environ if environ is None else environ
    geocoder = NominatimReverseGeocoder(
        base_url=config.geocoder.base_url,
        user_agent=config.geocoder.user_agent,
        timeout=config.geocoder.timeout_seconds,
    )

    providers: list[WeatherProvider] = []
    for pc in config.providers:
        if not pc.enabled:
            continue
        api_key = ""
        if pc.api_key_env:
            api_key = environ.get(pc.api_key_env, "")
            if not api_key:
                logger.warning("Skipping provider %s: %s is not set", pc.name, pc.api_key_env)
                continue
        providers.append(_build_provider(pc, api_key, geocoder))
    return providers


def build_manager(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> WeatherProviderManager:
    return WeatherProviderManager(
        build_providers(config, environ), priority=config.provider_priority
    )


def build_resolver(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> What3WordsClient | None:
    environ = os.environ if environ is None else environ
    api_key = environ.get(config.location.what3words_api_key_env, "")
    if not api_key:
        logger.warning(
            "%s not set, three-word addresses will be rejected",
            config.location.what3words_api_key_env,
        )
        return None
    return What3WordsClient(
        api_key,
        base_url=config.location.what3words_base_url,
        timeout=config.location.timeout_seconds,
    )


def build_messenger(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> TwilioClient | None:
    environ = os.environ if environ is None else environ
    m = config.messaging
    try:
        return TwilioClient(
            environ.get(m.account_sid_env, ""),
            environ.get(m.auth_token_env, ""),
            environ.get(m.from_number_env, ""),
            base_url=m.base_url,
            timeout=m.timeout_seconds,
        )
    except DeliveryError as e:
        logger.warning("Outbound messaging disabled: %s", e)
        return None


def build_handler(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> MessageHandler:
    return MessageHandler(
        build_manager(config, environ),
        resolver=build_resolver(config, environ),
        sender=build_messenger(config, environ),
        timeout=config.server.request_timeout_seconds,
        preferred_provider=config.preferred_provider,
    )
