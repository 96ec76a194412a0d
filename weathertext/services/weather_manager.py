"""Ordered failover across weather providers."""

import logging
from collections.abc import Sequence

from weathertext.errors import (
    AllProvidersFailedError,
    ProviderError,
    ProviderUnavailableError,
)
from weathertext.models.forecast import StandardizedForecast
from weathertext.providers.base import WeatherProvider
from weathertext.reporting.formatters import format_forecast

logger = logging.getLogger(__name__)


def build_priority_order(names: Sequence[str], hint: str | None = None) -> list[str]:
    """Order provider names by a comma-separated hint.

    Unknown hinted names are dropped; names missing from the hint follow in
    their original order.
    """
    order: list[str] = []
    if hint:
        for raw in hint.split(","):
            name = raw.strip()
            if name in names and name not in order:
                order.append(name)
    order.extend(n for n in names if n not in order)
    return order


class WeatherProviderManager:
    """Tries providers in priority order and returns the first success.

    ``active_provider`` records the last provider that succeeded. It is for
    diagnostics only; every call starts again from the top of the order.
    """

    def __init__(self, providers: Sequence[WeatherProvider], priority: str | None = None):
        if not providers:
            raise ValueError("At least one weather provider must be configured")

        self._providers: dict[str, WeatherProvider] = {}
        for provider in providers:
            if provider.name in self._providers:
                raise ValueError(f"Duplicate weather provider name: {provider.name}")
            self._providers[provider.name] = provider

        self._priority_order = build_priority_order(list(self._providers), priority)
        self._active_provider = self._providers[self._priority_order[0]]
        logger.info("Weather provider priority: %s", ", ".join(self._priority_order))

    @property
    def active_provider(self) -> WeatherProvider:
        return self._active_provider

    @property
    def priority_order(self) -> list[str]:
        return list(self._priority_order)

    @property
    def provider_names(self) -> list[str]:
        return list(self._providers)

    @property
    def providers(self) -> list[WeatherProvider]:
        return [self._providers[name] for name in self._priority_order]

    async def get_forecast(self, lat: float, lng: float, preferred: str | None = None) -> str:
        """Formatted reply text from the first provider that succeeds."""
        name, forecast = await self.get_standardized_forecast(lat, lng, preferred)
        return format_forecast(forecast, name)

    async def get_standardized_forecast(
        self, lat: float, lng: float, preferred: str | None = None
    ) -> tuple[str, StandardizedForecast]:
        errors: list[tuple[str, Exception]] = []

        tried: str | None = None
        if preferred is not None:
            provider = self._providers.get(preferred)
            if provider is None:
                logger.warning("Preferred provider %s is not registered, ignoring", preferred)
            else:
                tried = preferred
                forecast = await self._attempt(provider, lat, lng, errors, record_unavailable=True)
                if forecast is not None:
                    return provider.name, forecast

        for name in self._priority_order:
            if name == tried:
                continue
            provider = self._providers[name]
            forecast = await self._attempt(provider, lat, lng, errors)
            if forecast is not None:
                return provider.name, forecast

        logger.error("All weather providers failed (%d errors)", len(errors))
        raise AllProvidersFailedError(errors)

    async def _attempt(
        self,
        provider: WeatherProvider,
        lat: float,
        lng: float,
        errors: list[tuple[str, Exception]],
        record_unavailable: bool = False,
    ) -> StandardizedForecast | None:
        try:
            if not await provider.is_available():
                logger.info("Provider %s unavailable, skipping", provider.name)
                if record_unavailable:
                    errors.append((provider.name, ProviderUnavailableError(provider.name)))
                return None
            forecast = await provider.get_forecast(lat, lng)
        except ProviderError as e:
            logger.error("Provider %s failed: %s", provider.name, e)
            errors.append((provider.name, e))
            return None
        except Exception as e:
            logger.exception("Provider %s failed unexpectedly", provider.name)
            errors.append((provider.name, e))
            return None

        self._active_provider = provider
        logger.info("Using weather provider: %s", provider.name)
        return forecast

    async def availability(self) -> dict[str, bool]:
        """Probe every provider, keyed in priority order."""
        return {p.name: await p.is_available() for p in self.providers}
