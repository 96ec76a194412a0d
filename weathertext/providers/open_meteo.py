"""Open-Meteo hourly forecast adapter (no API key required)."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from weathertext.ingest.reverse_geocoder import NominatimReverseGeocoder
from weathertext.models.common import utc_now
from weathertext.models.forecast import StandardizedForecast
from weathertext.providers.base import (
    DEFAULT_TIMEOUT_SECONDS,
    ForecastInterval,
    WeatherProvider,
    build_forecast,
    finite,
    select_window,
)

logger = logging.getLogger(__name__)

OPEN_METEO_BASE_URL = "https://api.open-meteo.com"
HOURLY_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "weather_code",
)

WEATHER_CODE_LABELS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def weather_label(code: int) -> str:
    return WEATHER_CODE_LABELS.get(code, f"Code {code}")


class OpenMeteoProvider(WeatherProvider):
    def __init__(
        self,
        geocoder: NominatimReverseGeocoder | None = None,
        base_url: str = OPEN_METEO_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__(timeout=timeout)
        self.geocoder = geocoder or NominatimReverseGeocoder(timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.clock = clock

    @property
    def name(self) -> str:
        return "Open-Meteo"

    async def is_available(self) -> bool:
        return await self._probe(
            f"{self.base_url}/v1/forecast",
            params={"latitude": 0, "longitude": 0, "hourly": "temperature_2m", "forecast_days": 1},
        )

    async def get_forecast(self, lat: float, lng: float) -> StandardizedForecast:
        data = await self._get_json(
            f"{self.base_url}/v1/forecast",
            params={
                "latitude": f"{lat:.5f}",
                "longitude": f"{lng:.5f}",
                "hourly": ",".join(HOURLY_FIELDS),
                "timezone": "UTC",
                "timeformat": "unixtime",
                "forecast_days": 2,
            },
        )
        hourly = data.get("hourly") if isinstance(data, dict) else None
        if not isinstance(hourly, dict):
            raise self._invalid_payload()

        try:
            intervals = self._parse_hourly(hourly)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Open-Meteo payload could not be normalized: %s", e)
            raise self._invalid_payload() from e

        # The series starts at midnight; the current hour is the first reading
        hour_start = int(self.clock().replace(minute=0, second=0, microsecond=0).timestamp())
        upcoming = [i for i in intervals if i.timestamp >= hour_start]
        window = select_window(upcoming, step=3)
        if not window:
            logger.error("Open-Meteo returned no readings at or after %d", hour_start)
            raise self._invalid_payload()

        location = await self.geocoder.location_name(lat, lng)
        return build_forecast(location, window)

    @staticmethod
    def _parse_hourly(hourly: dict[str, Any]) -> list[ForecastInterval]:
        times = hourly["time"]
        temps = hourly["temperature_2m"]
        apparent = hourly["apparent_temperature"]
        humidity = hourly["relative_humidity_2m"]
        codes = hourly["weather_code"]

        count = min(len(times), len(temps), len(apparent), len(humidity), len(codes))
        return [
            ForecastInterval(
                timestamp=int(times[index]),
                temp=finite(temps[index]),
                feels_like=finite(apparent[index]),
                humidity=finite(humidity[index]),
                description=weather_label(int(codes[index])),
            )
            for index in range(count)
        ]
